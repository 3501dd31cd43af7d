from setuptools import setup, find_packages

setup(
    name="messagely",
    version="0.1.0",
    description="Messagely user and message storage backend",
    author="Your Name",
    author_email="your.email@example.com",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "sqlalchemy==2.0.42",
        "aiosqlite==0.21.0",
        "asyncpg==0.30.0",
        "environs==14.2.0",
        "pydantic==2.11.7",
        "dishka>=1.4,<2",
        "bcrypt==4.3.0",
        "python-json-logger==2.0.7",
    ],
    extras_require={
        "test": [
            "pytest==8.4.1",
            "pytest-asyncio==1.1.0",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "messagely-init-db=messagely.manage:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
