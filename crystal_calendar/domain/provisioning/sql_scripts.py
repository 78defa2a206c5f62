"""
Idempotent provisioning scripts for the Supabase database.

Every statement is safe to re-run (IF NOT EXISTS / OR REPLACE / DROP ... IF EXISTS).
Array-valued columns are JSONB so the ORM models map them on every dialect.
Foreign keys to auth.users / profiles / crystals are not declared inline; they
are created under fixed constraint names by the relationship manager.
"""

CREATE_PROFILES_TABLE = """
CREATE TABLE IF NOT EXISTS profiles (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  email VARCHAR(255) UNIQUE NOT NULL,
  name VARCHAR(100),
  birth_date DATE,
  gender VARCHAR(50),
  zodiac_sign VARCHAR(50),
  chinese_zodiac VARCHAR(50),
  element VARCHAR(50),
  mbti VARCHAR(10),
  answers JSONB DEFAULT '{}',
  chakra_analysis JSONB DEFAULT '{}',
  energy_preferences JSONB DEFAULT '[]',
  personality_insights JSONB DEFAULT '[]',
  enhanced_assessment JSONB DEFAULT '{}',
  avatar_url TEXT,
  location VARCHAR(100),
  timezone VARCHAR(50),
  language VARCHAR(10) DEFAULT 'zh',
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

CREATE_DESIGN_WORKS_TABLE = """
CREATE TABLE IF NOT EXISTS design_works (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  profile_id UUID,
  title VARCHAR(200),
  description TEXT,
  prompt TEXT,
  image_url TEXT NOT NULL,
  thumbnail_url TEXT,
  style VARCHAR(100),
  category VARCHAR(100),
  occasion VARCHAR(100),
  main_stone VARCHAR(100),
  auxiliary_stones JSONB DEFAULT '[]',
  preferences JSONB DEFAULT '{}',
  crystals_used JSONB DEFAULT '[]',
  colors JSONB DEFAULT '[]',
  tags JSONB DEFAULT '[]',
  is_favorite BOOLEAN DEFAULT FALSE,
  is_public BOOLEAN DEFAULT FALSE,
  view_count INTEGER DEFAULT 0,
  like_count INTEGER DEFAULT 0,
  share_count INTEGER DEFAULT 0,
  generation_params JSONB DEFAULT '{}',
  ai_analysis JSONB DEFAULT '{}',
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

CREATE_ENERGY_RECORDS_TABLE = """
CREATE TABLE IF NOT EXISTS user_energy_records (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  profile_id UUID,
  date DATE NOT NULL,
  energy_level INTEGER CONSTRAINT energy_level_range CHECK (energy_level >= 1 AND energy_level <= 10),
  chakra_states JSONB DEFAULT '{}',
  mood_tags JSONB DEFAULT '[]',
  emotions JSONB DEFAULT '{}',
  activities JSONB DEFAULT '[]',
  weather VARCHAR(50),
  lunar_phase VARCHAR(50),
  notes TEXT,
  ai_insights JSONB DEFAULT '{}',
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  UNIQUE(user_id, date)
);
"""

CREATE_MEDITATION_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS meditation_sessions (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  profile_id UUID,
  session_type VARCHAR(100) NOT NULL,
  title VARCHAR(200),
  description TEXT,
  duration_minutes INTEGER NOT NULL,
  crystals_used JSONB DEFAULT '[]',
  chakras_focused JSONB DEFAULT '[]',
  intentions JSONB DEFAULT '[]',
  guided_audio_url TEXT,
  background_music_url TEXT,
  completed_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  effectiveness_rating INTEGER CONSTRAINT meditation_rating_range CHECK (effectiveness_rating >= 1 AND effectiveness_rating <= 5),
  mood_before JSONB DEFAULT '{}',
  mood_after JSONB DEFAULT '{}',
  insights TEXT,
  notes TEXT,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

CREATE_MEMBERSHIP_INFO_TABLE = """
CREATE TABLE IF NOT EXISTS membership_info (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID UNIQUE,
  profile_id UUID,
  membership_type VARCHAR(50) DEFAULT 'free' CONSTRAINT membership_type_values CHECK (membership_type IN ('free', 'premium', 'ultimate')),
  status VARCHAR(50) DEFAULT 'active' CONSTRAINT membership_status_values CHECK (status IN ('active', 'expired', 'cancelled', 'suspended')),
  started_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  expires_at TIMESTAMP WITH TIME ZONE,
  auto_renew BOOLEAN DEFAULT FALSE,
  payment_method VARCHAR(50),
  stripe_customer_id VARCHAR(255),
  stripe_subscription_id VARCHAR(255),
  features_enabled JSONB DEFAULT '{}',
  usage_limits JSONB DEFAULT '{}',
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

CREATE_USAGE_STATS_TABLE = """
CREATE TABLE IF NOT EXISTS usage_stats (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  profile_id UUID,
  month DATE NOT NULL, -- first day of the month
  designs_generated INTEGER DEFAULT 0,
  images_created INTEGER DEFAULT 0,
  ai_consultations INTEGER DEFAULT 0,
  energy_analyses INTEGER DEFAULT 0,
  meditation_sessions INTEGER DEFAULT 0,
  premium_features_used INTEGER DEFAULT 0,
  api_calls INTEGER DEFAULT 0,
  storage_used_mb INTEGER DEFAULT 0,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  UNIQUE(user_id, month)
);
"""

CREATE_USER_SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS user_settings (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID UNIQUE,
  profile_id UUID,
  notification_preferences JSONB DEFAULT '{}',
  privacy_settings JSONB DEFAULT '{}',
  display_preferences JSONB DEFAULT '{}',
  ai_preferences JSONB DEFAULT '{}',
  reminder_settings JSONB DEFAULT '{}',
  language VARCHAR(10) DEFAULT 'zh',
  timezone VARCHAR(50) DEFAULT 'Asia/Shanghai',
  theme VARCHAR(20) DEFAULT 'light',
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

CREATE_CRYSTALS_TABLE = """
CREATE TABLE IF NOT EXISTS crystals (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  name VARCHAR(100) NOT NULL UNIQUE,
  name_en VARCHAR(100),
  category VARCHAR(50),
  color VARCHAR(50),
  chakra_association VARCHAR(50),
  element VARCHAR(50),
  hardness DECIMAL(3,1),
  origin VARCHAR(100),
  properties JSONB DEFAULT '[]',
  healing_properties JSONB DEFAULT '[]',
  emotional_benefits JSONB DEFAULT '[]',
  spiritual_benefits JSONB DEFAULT '[]',
  physical_benefits JSONB DEFAULT '[]',
  usage_instructions JSONB DEFAULT '[]',
  care_instructions JSONB DEFAULT '[]',
  price_range JSONB DEFAULT '{}',
  rarity VARCHAR(50),
  image_urls JSONB DEFAULT '[]',
  description TEXT,
  metaphysical_properties JSONB DEFAULT '{}',
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

CREATE_USER_FAVORITE_CRYSTALS_TABLE = """
CREATE TABLE IF NOT EXISTS user_favorite_crystals (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  profile_id UUID,
  crystal_id UUID,
  notes TEXT,
  personal_experience TEXT,
  effectiveness_rating INTEGER CONSTRAINT favorite_rating_range CHECK (effectiveness_rating >= 1 AND effectiveness_rating <= 5),
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  UNIQUE(user_id, crystal_id)
);
"""

CREATE_AI_CONVERSATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS ai_conversations (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  user_id UUID,
  profile_id UUID,
  conversation_type VARCHAR(100) NOT NULL,
  title VARCHAR(200),
  messages JSONB DEFAULT '[]',
  context JSONB DEFAULT '{}',
  ai_model VARCHAR(100),
  tokens_used INTEGER DEFAULT 0,
  started_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  last_message_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  status VARCHAR(50) DEFAULT 'active',
  tags JSONB DEFAULT '[]'
);
"""

CREATE_MONITORING_REPORTS_TABLE = """
CREATE TABLE IF NOT EXISTS monitoring_reports (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  session_id VARCHAR(100) NOT NULL,
  user_id VARCHAR(255),
  reported_at TIMESTAMP WITH TIME ZONE NOT NULL,
  metrics JSONB DEFAULT '[]',
  errors JSONB DEFAULT '[]',
  events JSONB DEFAULT '[]',
  system_status JSONB DEFAULT '{}',
  error_count INTEGER DEFAULT 0,
  event_count INTEGER DEFAULT 0,
  client_ip VARCHAR(100),
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);
"""

# (table, step description, script) in creation order
TABLE_SCRIPTS = [
    ("profiles", "Create profiles table", CREATE_PROFILES_TABLE),
    ("design_works", "Create design_works table", CREATE_DESIGN_WORKS_TABLE),
    ("user_energy_records", "Create user_energy_records table", CREATE_ENERGY_RECORDS_TABLE),
    ("meditation_sessions", "Create meditation_sessions table", CREATE_MEDITATION_SESSIONS_TABLE),
    ("membership_info", "Create membership_info table", CREATE_MEMBERSHIP_INFO_TABLE),
    ("usage_stats", "Create usage_stats table", CREATE_USAGE_STATS_TABLE),
    ("user_settings", "Create user_settings table", CREATE_USER_SETTINGS_TABLE),
    ("crystals", "Create crystals table", CREATE_CRYSTALS_TABLE),
    (
        "user_favorite_crystals",
        "Create user_favorite_crystals table",
        CREATE_USER_FAVORITE_CRYSTALS_TABLE,
    ),
    ("ai_conversations", "Create ai_conversations table", CREATE_AI_CONVERSATIONS_TABLE),
    ("monitoring_reports", "Create monitoring_reports table", CREATE_MONITORING_REPORTS_TABLE),
]

REQUIRED_TABLES = [table for table, _, _ in TABLE_SCRIPTS]

CREATE_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_profiles_user_id ON profiles(user_id);
CREATE INDEX IF NOT EXISTS idx_profiles_email ON profiles(email);
CREATE INDEX IF NOT EXISTS idx_profiles_created_at ON profiles(created_at);

CREATE INDEX IF NOT EXISTS idx_design_works_user_id ON design_works(user_id);
CREATE INDEX IF NOT EXISTS idx_design_works_profile_id ON design_works(profile_id);
CREATE INDEX IF NOT EXISTS idx_design_works_category ON design_works(category);
CREATE INDEX IF NOT EXISTS idx_design_works_created_at ON design_works(created_at);
CREATE INDEX IF NOT EXISTS idx_design_works_is_public ON design_works(is_public);

CREATE INDEX IF NOT EXISTS idx_energy_records_user_id ON user_energy_records(user_id);
CREATE INDEX IF NOT EXISTS idx_energy_records_profile_id ON user_energy_records(profile_id);
CREATE INDEX IF NOT EXISTS idx_energy_records_date ON user_energy_records(date);

CREATE INDEX IF NOT EXISTS idx_meditation_user_id ON meditation_sessions(user_id);
CREATE INDEX IF NOT EXISTS idx_meditation_profile_id ON meditation_sessions(profile_id);
CREATE INDEX IF NOT EXISTS idx_meditation_completed_at ON meditation_sessions(completed_at);
CREATE INDEX IF NOT EXISTS idx_meditation_type ON meditation_sessions(session_type);

CREATE INDEX IF NOT EXISTS idx_usage_stats_user_id ON usage_stats(user_id);
CREATE INDEX IF NOT EXISTS idx_usage_stats_month ON usage_stats(month);

CREATE INDEX IF NOT EXISTS idx_crystals_name ON crystals(name);
CREATE INDEX IF NOT EXISTS idx_crystals_category ON crystals(category);
CREATE INDEX IF NOT EXISTS idx_crystals_chakra ON crystals(chakra_association);

CREATE INDEX IF NOT EXISTS idx_ai_conversations_user_id ON ai_conversations(user_id);
CREATE INDEX IF NOT EXISTS idx_ai_conversations_type ON ai_conversations(conversation_type);
CREATE INDEX IF NOT EXISTS idx_ai_conversations_started_at ON ai_conversations(started_at);

CREATE INDEX IF NOT EXISTS idx_monitoring_reports_session_id ON monitoring_reports(session_id);
CREATE INDEX IF NOT EXISTS idx_monitoring_reports_reported_at ON monitoring_reports(reported_at);
"""

UPDATED_AT_FUNCTION = """
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = NOW();
    RETURN NEW;
END;
$$ language 'plpgsql';
"""

TRIGGER_TABLES = [
    ("profiles", "update_profiles_updated_at"),
    ("design_works", "update_design_works_updated_at"),
    ("user_energy_records", "update_energy_records_updated_at"),
    ("membership_info", "update_membership_info_updated_at"),
    ("usage_stats", "update_usage_stats_updated_at"),
    ("user_settings", "update_user_settings_updated_at"),
    ("crystals", "update_crystals_updated_at"),
]


def _updated_at_triggers() -> str:
    return "\n".join(
        f"DROP TRIGGER IF EXISTS {trigger} ON {table};\n"
        f"CREATE TRIGGER {trigger}\n"
        f"  BEFORE UPDATE ON {table}\n"
        f"  FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();\n"
        for table, trigger in TRIGGER_TABLES
    )


CREATE_TRIGGER_FUNCTIONS = UPDATED_AT_FUNCTION + "\n" + _updated_at_triggers()

SETUP_RLS_POLICIES = """
ALTER TABLE profiles ENABLE ROW LEVEL SECURITY;
ALTER TABLE design_works ENABLE ROW LEVEL SECURITY;
ALTER TABLE user_energy_records ENABLE ROW LEVEL SECURITY;
ALTER TABLE meditation_sessions ENABLE ROW LEVEL SECURITY;
ALTER TABLE membership_info ENABLE ROW LEVEL SECURITY;
ALTER TABLE usage_stats ENABLE ROW LEVEL SECURITY;
ALTER TABLE user_settings ENABLE ROW LEVEL SECURITY;
ALTER TABLE user_favorite_crystals ENABLE ROW LEVEL SECURITY;
ALTER TABLE ai_conversations ENABLE ROW LEVEL SECURITY;
ALTER TABLE monitoring_reports ENABLE ROW LEVEL SECURITY;

DROP POLICY IF EXISTS "Users can manage their own profiles" ON profiles;
CREATE POLICY "Users can manage their own profiles" ON profiles
  FOR ALL USING (auth.uid() = user_id OR email = auth.jwt() ->> 'email');

DROP POLICY IF EXISTS "Public profiles are viewable" ON profiles;
CREATE POLICY "Public profiles are viewable" ON profiles
  FOR SELECT USING (true);

DROP POLICY IF EXISTS "Users can manage their own designs" ON design_works;
CREATE POLICY "Users can manage their own designs" ON design_works
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Public designs are viewable" ON design_works;
CREATE POLICY "Public designs are viewable" ON design_works
  FOR SELECT USING (is_public = true OR auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can manage their own energy records" ON user_energy_records;
CREATE POLICY "Users can manage their own energy records" ON user_energy_records
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can manage their own meditation sessions" ON meditation_sessions;
CREATE POLICY "Users can manage their own meditation sessions" ON meditation_sessions
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can view their own membership" ON membership_info;
CREATE POLICY "Users can view their own membership" ON membership_info
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can view their own usage stats" ON usage_stats;
CREATE POLICY "Users can view their own usage stats" ON usage_stats
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can manage their own settings" ON user_settings;
CREATE POLICY "Users can manage their own settings" ON user_settings
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can manage their own favorite crystals" ON user_favorite_crystals;
CREATE POLICY "Users can manage their own favorite crystals" ON user_favorite_crystals
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Users can manage their own conversations" ON ai_conversations;
CREATE POLICY "Users can manage their own conversations" ON ai_conversations
  FOR ALL USING (auth.uid() = user_id);

DROP POLICY IF EXISTS "Crystals are publicly readable" ON crystals;
CREATE POLICY "Crystals are publicly readable" ON crystals
  FOR SELECT USING (true);
"""

# exec_sql returns 'ERROR: ...' instead of raising so callers can read the message
CREATE_DATABASE_FUNCTIONS = (
    """
CREATE OR REPLACE FUNCTION public.exec_sql(sql TEXT)
RETURNS TEXT
LANGUAGE plpgsql
SECURITY DEFINER
AS $$
BEGIN
  EXECUTE sql;
  RETURN 'SUCCESS';
EXCEPTION
  WHEN OTHERS THEN
    RETURN 'ERROR: ' || SQLERRM;
END;
$$;

CREATE OR REPLACE FUNCTION public.check_foreign_key_exists(
  constraint_name TEXT,
  table_name TEXT
)
RETURNS BOOLEAN
LANGUAGE plpgsql
SECURITY DEFINER
AS $$
DECLARE
  exists_count INTEGER;
BEGIN
  SELECT COUNT(*)
  INTO exists_count
  FROM information_schema.table_constraints tc
  WHERE tc.constraint_type = 'FOREIGN KEY'
    AND tc.constraint_name = check_foreign_key_exists.constraint_name
    AND tc.table_name = check_foreign_key_exists.table_name;

  RETURN exists_count > 0;
END;
$$;
"""
    + UPDATED_AT_FUNCTION
)

ADD_MISSING_COLUMNS = """
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS enhanced_assessment JSONB DEFAULT '{}';
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS avatar_url TEXT;
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS location VARCHAR(100);
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS timezone VARCHAR(50);
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS language VARCHAR(10) DEFAULT 'zh';
ALTER TABLE design_works ADD COLUMN IF NOT EXISTS occasion VARCHAR(100);
ALTER TABLE design_works ADD COLUMN IF NOT EXISTS main_stone VARCHAR(100);
ALTER TABLE design_works ADD COLUMN IF NOT EXISTS auxiliary_stones JSONB DEFAULT '[]';
ALTER TABLE design_works ADD COLUMN IF NOT EXISTS preferences JSONB DEFAULT '{}';
"""

SETUP_PERMISSIONS = """
ALTER TABLE profiles DISABLE ROW LEVEL SECURITY;
ALTER TABLE crystals DISABLE ROW LEVEL SECURITY;
"""

QUICK_FIX = """
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS enhanced_assessment JSONB DEFAULT '{}';
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS avatar_url TEXT;
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS location VARCHAR(100);
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS timezone VARCHAR(50);
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS language VARCHAR(10) DEFAULT 'zh';

ALTER TABLE profiles DISABLE ROW LEVEL SECURITY;

CREATE INDEX IF NOT EXISTS idx_profiles_user_id ON profiles(user_id);
CREATE INDEX IF NOT EXISTS idx_profiles_email ON profiles(email);
CREATE INDEX IF NOT EXISTS idx_profiles_created_at ON profiles(created_at);
"""

FIX_PROFILES_RLS = """
ALTER TABLE profiles DISABLE ROW LEVEL SECURITY;

DROP POLICY IF EXISTS "Users can manage their own profiles" ON profiles;
DROP POLICY IF EXISTS "Public profiles are viewable" ON profiles;
DROP POLICY IF EXISTS "Service role can manage all profiles" ON profiles;

CREATE POLICY "Service role can manage all profiles" ON profiles
  FOR ALL USING (current_user = 'postgres' OR current_user = 'service_role');

CREATE POLICY "Users can manage their own profiles" ON profiles
  FOR ALL USING (auth.uid() = user_id OR email = auth.jwt() ->> 'email');

CREATE POLICY "Public profiles are viewable" ON profiles
  FOR SELECT USING (true);

ALTER TABLE profiles ENABLE ROW LEVEL SECURITY;
"""

ADD_ENHANCED_ASSESSMENT_COLUMN = """
ALTER TABLE profiles ADD COLUMN IF NOT EXISTS enhanced_assessment JSONB DEFAULT '{}';
"""

BASIC_CRYSTALS = [
    {
        "name": "白水晶",
        "name_en": "Clear Quartz",
        "category": "石英族",
        "color": "无色透明",
        "chakra_association": "crown",
        "element": "风",
        "hardness": 7.0,
        "properties": ["净化", "放大", "治疗", "保护"],
        "healing_properties": ["增强能量", "清理负面情绪", "提升直觉"],
        "description": "被称为“水晶之王”，具有强大的净化和放大能力",
    },
    {
        "name": "粉水晶",
        "name_en": "Rose Quartz",
        "category": "石英族",
        "color": "粉红色",
        "chakra_association": "heart",
        "element": "水",
        "hardness": 7.0,
        "properties": ["爱情", "疗愈", "自我接纳", "慈悲"],
        "healing_properties": ["打开心轮", "吸引爱情", "疗愈情感创伤"],
        "description": "爱情之石，帮助开启心轮，带来无条件的爱",
    },
    {
        "name": "紫水晶",
        "name_en": "Amethyst",
        "category": "石英族",
        "color": "紫色",
        "chakra_association": "thirdEye",
        "element": "风",
        "hardness": 7.0,
        "properties": ["智慧", "直觉", "冥想", "平静"],
        "healing_properties": ["增强直觉", "促进冥想", "缓解压力"],
        "description": "智慧之石，增强精神力量和直觉能力",
    },
    {
        "name": "黑曜石",
        "name_en": "Obsidian",
        "category": "火山玻璃",
        "color": "黑色",
        "chakra_association": "root",
        "element": "土",
        "hardness": 5.5,
        "properties": ["保护", "接地", "清理", "勇气"],
        "healing_properties": ["消除负能量", "增强根基", "提供保护"],
        "description": "强力的保护石，帮助清除负面能量并建立稳固根基",
    },
]

# Seeded by the complete setup in addition to the basic crystals
EXTENDED_CRYSTALS = BASIC_CRYSTALS + [
    {
        "name": "黄水晶",
        "name_en": "Citrine",
        "category": "石英族",
        "color": "黄色",
        "chakra_association": "solarPlexus",
        "element": "火",
        "hardness": 7.0,
        "properties": ["财富", "自信", "创造力", "成功"],
        "healing_properties": ["增强自信", "吸引财富", "激发创造力"],
        "description": "财富之石，带来成功和繁荣，激发个人力量",
    },
    {
        "name": "绿幽灵",
        "name_en": "Green Phantom Quartz",
        "category": "石英族",
        "color": "绿色",
        "chakra_association": "heart",
        "element": "木",
        "hardness": 7.0,
        "properties": ["事业", "财富", "成长", "机遇"],
        "healing_properties": ["促进事业发展", "吸引正财", "增强领导力"],
        "description": "事业运之石，有助于事业发展和财富积累",
    },
]
