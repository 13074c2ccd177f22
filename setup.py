# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- DATABASE ---
    "duckdb>=0.10.0",

    # --- CONFIG & MODELS ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- TERMINAL UI ---
    "rich>=13.0.0",
]

extras_require = {
    # --- TESTS---
    "test": [
        "pytest-asyncio>=0.24.0",
        "pytest",
    ],
}

setup(
    name="todolist",
    version="1.0.0",
    description="Single-user task list with a persisted theme preference",
    packages=find_packages(include=["todolist", "todolist.*"]),
    package_data={"todolist.shared.config": ["settings/*.yaml"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={"console_scripts": ["todolist=todolist.app.main:main"]},
    python_requires=">=3.11",
)
