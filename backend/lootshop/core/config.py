from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from lootshop.models.coupon import CouponTier
from lootshop.services.reward_rules import RewardConfig, build_tiers


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "Lootshop API"
    app_version: str = "0.1.0"
    environment: str = "local"
    log_json: bool = False

    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Content-Type", "Authorization"]

    seed_products: bool = True

    # Every Nth order earns a reward coupon.
    discount_n: int = 4
    reward_weight_common: int = 90
    reward_weight_rare: int = 8
    reward_weight_legendary: int = 2

    def reward_config(self) -> RewardConfig:
        """Build the validated reward configuration; raises InvalidConfiguration."""
        tiers = build_tiers(
            {
                CouponTier.COMMON: self.reward_weight_common,
                CouponTier.RARE: self.reward_weight_rare,
                CouponTier.LEGENDARY: self.reward_weight_legendary,
            }
        )
        return RewardConfig(order_interval=self.discount_n, tiers=tiers)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
