"""Setup script for the cagle package."""

from setuptools import setup, find_packages

setup(
    name="cagle",
    version="0.1.0",
    description="Promote project Claude permissions to global settings",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        'windows-curses; platform_system == "Windows"',
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy"],
    },
    entry_points={
        "console_scripts": [
            "cagle = cagle.cli:run",
        ],
    },
)
