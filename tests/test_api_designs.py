"""/api/save-design and /api/designs."""

import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError

from crystal_calendar.domain.designs.repository import DesignRepository
from crystal_calendar.domain.designs.schemas import DesignWorkResponse
from crystal_calendar.models import DesignWork

DESIGN = {
    "title": "Moonlit bracelet",
    "description": {"summary": "Calming bracelet", "materials": ["silver"]},
    "mainStone": "Moonstone",
    "auxiliaryStones": ["Clear Quartz", "Amethyst"],
    "style": "minimal",
    "occasion": "daily",
    "preferences": {"color": "white"},
    "imageUrl": "https://images.example.com/design.png",
    "aiAnalysis": {"energy": "calm"},
}


class TestSaveDesign:
    def test_requires_token(self, client):
        assert client.post("/api/save-design", json=DESIGN).status_code in (401, 403)

    def test_saves_row_for_token_user(self, client, user_headers, user_id, db):
        response = client.post("/api/save-design", json=DESIGN, headers=user_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        row = body["data"][0]
        assert row["user_id"] == user_id
        assert row["main_stone"] == "Moonstone"
        assert row["auxiliary_stones"] == ["Clear Quartz", "Amethyst"]
        assert row["is_public"] is False
        assert db.query(DesignWork).count() == 1

    def test_structured_description_stored_as_json_text(self, client, user_headers, db):
        client.post("/api/save-design", json=DESIGN, headers=user_headers)
        stored = db.query(DesignWork).one()
        assert stored.description.startswith("{")
        assert "Calming bracelet" in stored.description

    def test_public_flag(self, client, user_headers):
        body = client.post("/api/save-design", json={**DESIGN, "isPublic": True}, headers=user_headers).json()
        assert body["data"][0]["is_public"] is True

    def test_image_url_required(self, client, user_headers):
        payload = {k: v for k, v in DESIGN.items() if k != "imageUrl"}
        assert client.post("/api/save-design", json=payload, headers=user_headers).status_code == 422

    def test_database_failure(self, client, user_headers, monkeypatch):
        def failing_create(db, user_id, **design_data):
            raise SQLAlchemyError("insert rejected")

        monkeypatch.setattr(DesignRepository, "create_design", staticmethod(failing_create))
        response = client.post("/api/save-design", json=DESIGN, headers=user_headers)
        assert response.status_code == 500
        assert response.json()["success"] is False


class TestListDesigns:
    def test_only_own_designs_newest_first(self, client, user_headers, user_id, db):
        now = datetime.now(timezone.utc)
        owner = uuid.UUID(user_id)
        db.add_all(
            [
                DesignWork(user_id=owner, title="older", image_url="a.png", created_at=now - timedelta(days=1)),
                DesignWork(user_id=owner, title="newer", image_url="b.png", created_at=now),
                DesignWork(user_id=uuid.uuid4(), title="someone else", image_url="c.png", created_at=now),
            ]
        )
        db.commit()

        response = client.get("/api/designs", headers=user_headers)
        assert response.status_code == 200
        assert [d["title"] for d in response.json()] == ["newer", "older"]


class TestDesignWorkResponse:
    def test_reads_orm_rows(self):
        row = DesignWork(
            id=uuid.uuid4(),
            title="Rose heart",
            image_url="https://images.example.com/rose.png",
            is_public=True,
            is_favorite=False,
        )
        assert DesignWorkResponse.model_config["from_attributes"] is True
        response = DesignWorkResponse.model_validate(row)
        assert response.title == "Rose heart"
        assert response.is_public is True
