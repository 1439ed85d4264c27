"""
Setup script for resumetext.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

test_requirements = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
    "pypdf>=3.0.0",
    "python-docx>=1.0.0",
    "httpx>=0.24.0",
]

setup(
    name="resumetext",
    version="0.1.0",
    description="Dependency-free PDF and DOCX text extraction for résumé ingestion pipelines",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="resumetext Contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*", "apps", "apps.*"]),
    install_requires=[
        "click>=8.0.0",
        "rich>=13.0.0",
        "fastapi>=0.100.0",
        "python-multipart>=0.0.6",
    ],
    extras_require={
        "test": test_requirements,
        "dev": test_requirements,
    },
    entry_points={
        "console_scripts": [
            "resumetext=resumetext.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing",
        "Topic :: Office/Business",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf docx resume text extraction flatedecode parser",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
