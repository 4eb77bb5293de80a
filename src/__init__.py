"""Content Entry Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Shared content repository entries (save, share, delete) on AWS Lambda, S3, DynamoDB and SQS"
)

__all__ = ["handlers", "core"]
