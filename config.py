import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


class Config:
    # MongoDB
    DB_USER = quote_plus(os.getenv("DB_USER", ""))
    DB_PASS = quote_plus(os.getenv("DB_PASS", ""))  # encode special chars
    DB_CLUSTER = os.getenv("DB_CLUSTER", "cluster0.bnuku.mongodb.net")
    DB_NAME = os.getenv("DB_NAME", "BloodLinkDB")
    MONGO_URI = os.getenv(
        "MONGO_URI",
        f"mongodb+srv://{DB_USER}:{DB_PASS}@{DB_CLUSTER}/?retryWrites=true&w=majority&appName=Cluster0",
    )

    PORT = int(os.getenv("PORT", 5000))
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Email (SendGrid)
    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    MAIL_FROM = os.getenv("MAIL_FROM", "noreply@bloodlink.app")
