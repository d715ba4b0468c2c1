#!/usr/bin/env python3
"""
Management commands for Task Tracker.

Usage:
    python manage.py init_db
    python manage.py check_db
    python manage.py reset_db
    python manage.py create_user <email> <password> [full_name]
    python manage.py runserver [host] [port]
"""

import sys
from sqlmodel import SQLModel
from sqlalchemy import inspect
from database import engine, get_session
from settings import logger
from helpers.auth import hash_password
# Import all models to ensure tables are created
from models.auth import User, Token  # noqa: F401
from models.tasks import Task  # noqa: F401


def init_db():
    """Initialize database tables."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


def check_db():
    """Check database connection and tables."""
    try:
        tables = inspect(engine).get_table_names()
        logger.info(f"Database connected. Found {len(tables)} tables: {tables}")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)


def reset_db():
    """Drop and recreate all database tables."""
    logger.warning("Dropping all database tables...")
    SQLModel.metadata.drop_all(engine)
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database reset successfully")


def create_user(email: str, password: str, full_name: str = None):
    """Create a user account."""
    try:
        with next(get_session()) as session:
            user = User(
                email=email.strip().lower(),
                full_name=full_name,
                hashed_password=hash_password(password),
                is_active=True
            )

            session.add(user)
            session.commit()
            session.refresh(user)

            logger.info(f"User '{user.email}' created successfully with ID: {user.id}")
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        sys.exit(1)


def runserver(host: str = "127.0.0.1", port: str = "8000"):
    """Serve the API with uvicorn."""
    import uvicorn
    uvicorn.run("main:app", host=host, port=int(port))


def main():
    if len(sys.argv) < 2:
        print("Usage: python manage.py <command> [args]")
        print("Commands:")
        print("  init_db                                   - Initialize database tables")
        print("  check_db                                  - Check database connection")
        print("  reset_db                                  - Drop and recreate all tables")
        print("  create_user <email> <password> [full_name] - Create a user account")
        print("  runserver [host] [port]                   - Run the API server")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init_db":
        init_db()
    elif command == "check_db":
        check_db()
    elif command == "reset_db":
        reset_db()
    elif command == "create_user":
        if len(sys.argv) < 4:
            print("Usage: python manage.py create_user <email> <password> [full_name]")
            sys.exit(1)
        create_user(sys.argv[2], sys.argv[3], sys.argv[4] if len(sys.argv) > 4 else None)
    elif command == "runserver":
        runserver(*sys.argv[2:4])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
