import os
from dotenv import load_dotenv

load_dotenv()

storage_backend = os.getenv("STORAGE_BACKEND", "sqlite")
data_dir = os.getenv("DATA_DIR", "data")
db_file_name = os.getenv("DB_FILE_NAME", "rps_game.db")
log_level = os.getenv("LOG_LEVEL", "INFO")

if __name__ == "__main__":
    print(storage_backend, data_dir, db_file_name, log_level)
