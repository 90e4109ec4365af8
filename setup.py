#!/usr/bin/env python3
"""
hulud-scan Setup Script
"""

from pathlib import Path
from setuptools import find_packages, setup

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_file.exists():
    requirements = [
        line.strip()
        for line in requirements_file.read_text().splitlines()
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="hulud-scan",
    version="1.0.0",
    description="Offline scanner for Sha1-Hulud compromised npm packages",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="hulud-scan Contributors",
    license="MIT",

    # Packages
    packages=find_packages(exclude=["tests", "tests.*", "docs"]),
    include_package_data=True,

    # Requirements
    python_requires=">=3.10",
    install_requires=requirements,

    # Optional dependencies
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ],
    },

    # Entry points
    entry_points={
        "console_scripts": [
            "hulud-scan=hulud_scan.cli:main",
        ],
    },

    # Package data
    package_data={
        "hulud_scan": [
            "data/*.txt",
        ],
    },

    # Classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security",
        "Topic :: Software Development :: Quality Assurance",
    ],

    # Keywords
    keywords="security supply-chain npm sha1-hulud shai-hulud scanner",
)
