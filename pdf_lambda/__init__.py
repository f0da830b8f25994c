"""
PDF Lambda - Serverless HTML to PDF conversion.

Converts one or more HTML pages into a single PDF using the wkhtmltopdf
binary and uploads the result to S3. Designed to run as an AWS Lambda
function; see pdf_lambda.handler for the entry point.
"""

__version__ = "0.1.0"
