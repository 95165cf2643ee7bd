# init_db.py - wipe and recreate the QuickChat schema

from quickchat.infra.database import reset_db
from quickchat.utils.logger import setup_logger

if __name__ == "__main__":
    setup_logger()
    reset_db()
