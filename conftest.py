import os

# Settings are read when api.main is imported
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
