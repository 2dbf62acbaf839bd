"""
Configuration and environment handling for SellerOps.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class OpenAIConfig(BaseModel):
    """OpenAI API configuration for the command classifier."""
    api_key: str = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    model: str = Field(default_factory=lambda: os.getenv("SELLEROPS_MODEL", "gpt-4o"))
    max_tokens: int = Field(default=1024)
    temperature: float = Field(default=0.0)
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("SELLEROPS_CLASSIFIER_TIMEOUT", "30")),
        description="Transport timeout for a single classification call",
    )


class PlatformConfig(BaseModel):
    """Seller platform backend configuration."""
    base_url: str = Field(
        default_factory=lambda: os.getenv("SELLEROPS_BACKEND_URL", "http://localhost:5000")
    )
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("SELLEROPS_PLATFORM_TIMEOUT", "60")),
        description="Image and content-bearing calls can be slow",
    )
    max_attempts: int = Field(default=3, description="Transport attempts before giving up")


class PolicyConfig(BaseModel):
    """House policy for command execution."""
    discount_cap_percent: float = Field(
        default_factory=lambda: float(os.getenv("SELLEROPS_DISCOUNT_CAP_PERCENT", "40")),
        description="Percentage discounts above this are rejected before any call",
    )
    price_floor: float = Field(
        default_factory=lambda: float(os.getenv("SELLEROPS_PRICE_FLOOR", "0.99")),
        description="No computed price may go below this",
    )
    min_confidence: float = Field(
        default_factory=lambda: float(os.getenv("SELLEROPS_MIN_CONFIDENCE", "0")),
        ge=0,
        le=1,
        description="Classifications below this confidence are treated as unknown",
    )
    bulk_max_workers: int = Field(
        default=1,
        ge=1,
        description="1 = sequential bulk fan-out",
    )


class UIConfig(BaseModel):
    """UI configuration."""
    page_title: str = Field(default="SellerOps Control Plane")
    page_icon: str = Field(default="⚡")
    theme_primary_color: str = Field(default="#3B82F6")
    theme_accent_color: str = Field(default="#F59E0B")


class Config(BaseModel):
    """Main configuration."""
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    # Feature flags
    enable_preview: bool = Field(default=True)
    enable_debug_panel: bool = Field(default=False)


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
