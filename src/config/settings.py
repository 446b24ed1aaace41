"""
Environment-specific configuration settings.

Every value can be overridden through an environment variable of the same
name in upper case.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Application settings with local-friendly defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"

    # Bedrock Configuration
    bedrock_region: str = "eu-west-2"
    model_id: str = "anthropic.claude-3-haiku-20240307-v1:0"
    wish_max_tokens: int = 120

    # DynamoDB tables
    customers_table: str = "celebration-customers"
    staff_table: str = "celebration-staff"
    sessions_table: str = "celebration-sessions"

    # Admin credential; an empty password disables admin login
    admin_username: str = "admin"
    admin_password: str = ""

    # Business
    business_name: str = "VPP Jewellers"
    business_timezone: str = "UTC"

    # Sessions expire through the DynamoDB TTL attribute
    session_ttl_hours: int = 12

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        region = os.environ.get("AWS_REGION", cls.aws_region)
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            aws_region=region,
            bedrock_region=os.environ.get("BEDROCK_REGION") or region,
            model_id=os.environ.get("MODEL_ID", cls.model_id),
            wish_max_tokens=int(os.environ.get("WISH_MAX_TOKENS", cls.wish_max_tokens)),
            customers_table=os.environ.get("CUSTOMERS_TABLE", cls.customers_table),
            staff_table=os.environ.get("STAFF_TABLE", cls.staff_table),
            sessions_table=os.environ.get("SESSIONS_TABLE", cls.sessions_table),
            admin_username=os.environ.get("ADMIN_USERNAME", cls.admin_username).strip(),
            admin_password=os.environ.get("ADMIN_PASSWORD", "").strip(),
            business_name=os.environ.get("BUSINESS_NAME", cls.business_name),
            business_timezone=os.environ.get("BUSINESS_TIMEZONE", cls.business_timezone),
            session_ttl_hours=int(os.environ.get("SESSION_TTL_HOURS", cls.session_ttl_hours)),
        )
