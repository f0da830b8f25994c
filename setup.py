"""
Setup script for pdf-lambda.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="pdf-lambda",
    version="0.1.0",
    description="AWS Lambda that renders HTML pages to PDF with wkhtmltopdf and uploads to S3",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "boto3>=1.28",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdf-lambda=pdf_lambda.cli:main",
        ],
    },
)
