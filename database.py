from sqlmodel import Session, create_engine
from settings import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)


def get_session():
    """Yield a database session for the lifetime of one request."""
    with Session(engine) as session:
        yield session
