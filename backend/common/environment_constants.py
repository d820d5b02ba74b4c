DATABASE_URL = "DATABASE_URL"
LOG_LEVEL = "LOG_LEVEL"

SUPABASE_JWT_SECRET = "SUPABASE_JWT_SECRET"
SUPABASE_JWT_AUDIENCE = "SUPABASE_JWT_AUDIENCE"

CORS_ALLOW_ORIGINS = "CORS_ALLOW_ORIGINS"
