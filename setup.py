"""
Setup script for the ttt-stake-client package.

Installs the ``ttt_client`` package from src/ together with the
``ttt-client`` console command.
"""

from setuptools import setup, find_packages

setup(
    name="ttt-stake-client",
    version="1.0.0",
    description="Command-line client for stake-backed tic-tac-toe on Solana",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "requests>=2.31.0",
        "solders>=0.21.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "ttt-client=ttt_client.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
