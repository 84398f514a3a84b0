"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Dict, Literal, Optional


class BankConfig(BaseSettings):
    """GTT Bank configuration"""
    
    # Presentation
    bank_name: str = "GTT Bank"
    currency_symbol: str = "₹"
    amount_precision: int = Field(default=2, ge=0, le=8)
    allow_account_creation: bool = True
    show_holder_name: bool = True
    
    # Accounts present at startup: account id -> holder name
    seed_accounts: Dict[str, Optional[str]] = Field(
        default_factory=lambda: {"12345678": None}
    )
    
    # Authentication
    auth_mode: Literal["shared", "hashed"] = "shared"
    shared_password: str = "password"  # Demo placeholder, see credentials.py
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    session_timeout_minutes: int = 30
    
    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8090
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    
    class Config:
        env_prefix = "GTT_BANK_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BankConfig()


def get_config() -> BankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankConfig:
    """Reload configuration from environment"""
    global config
    config = BankConfig()
    return config
