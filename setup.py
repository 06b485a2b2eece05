from setuptools import setup, find_namespace_packages

setup(
    name="floating_librarian",
    version="0.1.0",
    packages=find_namespace_packages(include=['librarian*']),
    include_package_data=True,
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "requests",
        "pydantic>=2",
        "pydantic-settings>=2",
        "python-dotenv",
        "slack_bolt",
        "sentry-sdk>=2.15",
        "psycopg2-binary",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "floating-librarian=librarian.cli.main:main",
        ],
    },
)
