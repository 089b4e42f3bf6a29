import pathlib

from sqlalchemy import Engine, create_engine

from rps_game.load_secrets import data_dir, db_file_name


def sqlite_url(directory: str = data_dir, file_name: str = db_file_name) -> str:
    file_path = pathlib.Path(directory)
    file_path.mkdir(parents=True, exist_ok=True)
    file_path /= file_name
    return f"sqlite:///{file_path}"


def create_sqlite_engine(directory: str = data_dir, file_name: str = db_file_name) -> Engine:
    return create_engine(url=sqlite_url(directory, file_name), echo=False)
