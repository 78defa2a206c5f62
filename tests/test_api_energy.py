"""Energy, schedule and MBTI endpoints."""


class TestEnergyEndpoints:
    def test_prediction_for_date(self, client):
        response = client.get("/api/energy/prediction", params={"date": "2024-01-01"})
        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2024-01-01"
        assert data["energy_level"] == 4
        assert data["dominant_chakra"] == "sacral"

    def test_prediction_with_profile(self, client):
        response = client.get(
            "/api/energy/prediction",
            params={"date": "2024-01-06", "mbti": "INFJ", "element": "water", "zodiac": "pisces"},
        )
        assert response.json()["energy_level"] == 4
        assert response.json()["element_balance"] == "Flowing and calm"

    def test_calendar(self, client):
        response = client.get("/api/energy/calendar", params={"center": "2024-03-10", "span": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["span"] == 3
        assert [d["date"] for d in data["days"]][3] == "2024-03-10"
        assert len(data["days"]) == 7

    def test_calendar_span_validated(self, client):
        assert client.get("/api/energy/calendar", params={"span": 0}).status_code == 422
        assert client.get("/api/energy/calendar", params={"span": 32}).status_code == 422


class TestScheduleEndpoints:
    def test_suggestion_for_introvert(self, client):
        response = client.get("/api/schedule/suggestion", params={"date": "2024-01-06", "mbti": "INTP"})
        assert response.status_code == 200
        categories = [block["category"] for block in response.json()["blocks"]]
        assert "social" not in categories

    def test_toggle_block(self, client):
        schedule = client.get("/api/schedule/suggestion", params={"date": "2024-01-01"}).json()
        response = client.post("/api/schedule/toggle", json={"schedule": schedule, "blockId": "2024-01-01-2"})
        assert response.status_code == 200
        assert response.json()["blocks"][1]["completed"] is True

    def test_toggle_unknown_block(self, client):
        schedule = client.get("/api/schedule/suggestion", params={"date": "2024-01-01"}).json()
        response = client.post("/api/schedule/toggle", json={"schedule": schedule, "blockId": "nope"})
        assert response.status_code == 404


class TestMbtiEndpoint:
    def test_complete_answers(self, client):
        body = {"ei": ["B"] * 7, "sn": ["B"] * 7, "tf": ["A"] * 7, "jp": ["A"] * 7}
        response = client.post("/api/mbti/calculate", json=body)
        assert response.status_code == 200
        assert response.json()["type"] == "INTJ"
        assert response.json()["isComplete"] is True

    def test_incomplete_answers(self, client):
        body = {"ei": ["B"] * 7, "sn": ["B"] * 7, "tf": ["A"] * 7, "jp": ["A"] * 6 + [None]}
        assert client.post("/api/mbti/calculate", json=body).status_code == 422
