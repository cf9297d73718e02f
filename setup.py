from setuptools import setup  # type: ignore

setup(
    name="warden-core",
    version="0.0.0",
    python_requires=">=3.11",
    packages=[
        "warden",
        "warden.application",
        "warden.application.user",
        "warden.domain",
        "warden.domain.repo",
        "warden.infra",
    ],
    install_requires=[
        "passlib[bcrypt]>=1.7.4",
        # passlib's bcrypt backend breaks on bcrypt>=4.1
        "bcrypt==4.0.1",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
)
