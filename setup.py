from setuptools import setup, find_namespace_packages

setup(
    name="workhub",
    version="1.0.0",
    packages=find_namespace_packages(include=["workhub_common*", "app*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        # passlib 1.7.4 no soporta bcrypt >= 4.1
        "bcrypt==4.0.1",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg",
        "pydantic[email]>=2.0",
        "alembic",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
            "aiosqlite",
        ],
    },
)
