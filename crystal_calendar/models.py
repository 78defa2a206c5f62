import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# JSONB on PostgreSQL (matches the provisioning scripts), plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)  # auth.users(id), linked by relationship repair
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=True)
    birth_date = Column(Date, nullable=True)
    gender = Column(String(50), nullable=True)
    zodiac_sign = Column(String(50), nullable=True)
    chinese_zodiac = Column(String(50), nullable=True)
    element = Column(String(50), nullable=True)
    mbti = Column(String(10), nullable=True)
    answers = Column(JSONType, default=dict)
    chakra_analysis = Column(JSONType, default=dict)
    energy_preferences = Column(JSONType, default=list)
    personality_insights = Column(JSONType, default=list)
    enhanced_assessment = Column(JSONType, default=dict)
    avatar_url = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    timezone = Column(String(50), nullable=True)
    language = Column(String(10), default="zh")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    design_works = relationship("DesignWork", back_populates="profile")


class DesignWork(Base):
    __tablename__ = "design_works"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    title = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    prompt = Column(Text, nullable=True)
    image_url = Column(Text, nullable=False)
    thumbnail_url = Column(Text, nullable=True)
    style = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)
    occasion = Column(String(100), nullable=True)
    main_stone = Column(String(100), nullable=True)
    auxiliary_stones = Column(JSONType, default=list)
    preferences = Column(JSONType, default=dict)
    crystals_used = Column(JSONType, default=list)
    colors = Column(JSONType, default=list)
    tags = Column(JSONType, default=list)
    is_favorite = Column(Boolean, default=False)
    is_public = Column(Boolean, default=False)
    view_count = Column(Integer, default=0)
    like_count = Column(Integer, default=0)
    share_count = Column(Integer, default=0)
    generation_params = Column(JSONType, default=dict)
    ai_analysis = Column(JSONType, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="design_works")


class EnergyRecord(Base):
    __tablename__ = "user_energy_records"
    __table_args__ = (
        UniqueConstraint("user_id", "date"),
        CheckConstraint("energy_level >= 1 AND energy_level <= 10", name="energy_level_range"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    energy_level = Column(Integer, nullable=True)
    chakra_states = Column(JSONType, default=dict)
    mood_tags = Column(JSONType, default=list)
    emotions = Column(JSONType, default=dict)
    activities = Column(JSONType, default=list)
    weather = Column(String(50), nullable=True)
    lunar_phase = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    ai_insights = Column(JSONType, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class MeditationSession(Base):
    __tablename__ = "meditation_sessions"
    __table_args__ = (
        CheckConstraint(
            "effectiveness_rating >= 1 AND effectiveness_rating <= 5",
            name="meditation_rating_range",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    session_type = Column(String(100), nullable=False)
    title = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False)
    crystals_used = Column(JSONType, default=list)
    chakras_focused = Column(JSONType, default=list)
    intentions = Column(JSONType, default=list)
    guided_audio_url = Column(Text, nullable=True)
    background_music_url = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), server_default=func.now())
    effectiveness_rating = Column(Integer, nullable=True)
    mood_before = Column(JSONType, default=dict)
    mood_after = Column(JSONType, default=dict)
    insights = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class MembershipInfo(Base):
    __tablename__ = "membership_info"
    __table_args__ = (
        CheckConstraint(
            "membership_type IN ('free', 'premium', 'ultimate')", name="membership_type_values"
        ),
        CheckConstraint(
            "status IN ('active', 'expired', 'cancelled', 'suspended')",
            name="membership_status_values",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, unique=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    membership_type = Column(String(50), default="free")
    status = Column(String(50), default="active")
    started_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=True)
    auto_renew = Column(Boolean, default=False)
    payment_method = Column(String(50), nullable=True)
    stripe_customer_id = Column(String(255), nullable=True)
    stripe_subscription_id = Column(String(255), nullable=True)
    features_enabled = Column(JSONType, default=dict)
    usage_limits = Column(JSONType, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class UsageStats(Base):
    __tablename__ = "usage_stats"
    __table_args__ = (UniqueConstraint("user_id", "month"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    month = Column(Date, nullable=False)  # First day of the month
    designs_generated = Column(Integer, default=0)
    images_created = Column(Integer, default=0)
    ai_consultations = Column(Integer, default=0)
    energy_analyses = Column(Integer, default=0)
    meditation_sessions = Column(Integer, default=0)
    premium_features_used = Column(Integer, default=0)
    api_calls = Column(Integer, default=0)
    storage_used_mb = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, unique=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    notification_preferences = Column(JSONType, default=dict)
    privacy_settings = Column(JSONType, default=dict)
    display_preferences = Column(JSONType, default=dict)
    ai_preferences = Column(JSONType, default=dict)
    reminder_settings = Column(JSONType, default=dict)
    language = Column(String(10), default="zh")
    timezone = Column(String(50), default="Asia/Shanghai")
    theme = Column(String(20), default="light")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Crystal(Base):
    __tablename__ = "crystals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False, index=True)
    name_en = Column(String(100), nullable=True)
    category = Column(String(50), nullable=True)
    color = Column(String(50), nullable=True)
    chakra_association = Column(String(50), nullable=True)
    element = Column(String(50), nullable=True)
    hardness = Column(Numeric(3, 1), nullable=True)
    origin = Column(String(100), nullable=True)
    properties = Column(JSONType, default=list)
    healing_properties = Column(JSONType, default=list)
    emotional_benefits = Column(JSONType, default=list)
    spiritual_benefits = Column(JSONType, default=list)
    physical_benefits = Column(JSONType, default=list)
    usage_instructions = Column(JSONType, default=list)
    care_instructions = Column(JSONType, default=list)
    price_range = Column(JSONType, default=dict)
    rarity = Column(String(50), nullable=True)
    image_urls = Column(JSONType, default=list)
    description = Column(Text, nullable=True)
    metaphysical_properties = Column(JSONType, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class UserFavoriteCrystal(Base):
    __tablename__ = "user_favorite_crystals"
    __table_args__ = (
        UniqueConstraint("user_id", "crystal_id"),
        CheckConstraint(
            "effectiveness_rating >= 1 AND effectiveness_rating <= 5",
            name="favorite_rating_range",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    crystal_id = Column(Uuid, ForeignKey("crystals.id", ondelete="CASCADE"), nullable=True)
    notes = Column(Text, nullable=True)
    personal_experience = Column(Text, nullable=True)
    effectiveness_rating = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AIConversation(Base):
    __tablename__ = "ai_conversations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, index=True, nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    conversation_type = Column(String(100), nullable=False, index=True)
    title = Column(String(200), nullable=True)
    messages = Column(JSONType, default=list)
    context = Column(JSONType, default=dict)
    ai_model = Column(String(100), nullable=True)
    tokens_used = Column(Integer, default=0)
    started_at = Column(DateTime(timezone=True), server_default=func.now())
    last_message_at = Column(DateTime(timezone=True), server_default=func.now())
    status = Column(String(50), default="active")
    tags = Column(JSONType, default=list)


class MonitoringReport(Base):
    __tablename__ = "monitoring_reports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(String(100), index=True, nullable=False)
    user_id = Column(String(255), nullable=True)
    reported_at = Column(DateTime(timezone=True), nullable=False)
    metrics = Column(JSONType, default=list)
    errors = Column(JSONType, default=list)
    events = Column(JSONType, default=list)
    system_status = Column(JSONType, default=dict)
    error_count = Column(Integer, default=0)
    event_count = Column(Integer, default=0)
    client_ip = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
