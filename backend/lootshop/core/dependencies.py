from fastapi import Depends, Request

from lootshop.db.store import InMemoryStore
from lootshop.services.admin_stats import AdminStatsService
from lootshop.services.checkout import CheckoutEngine
from lootshop.services.reward_rules import RewardConfig
from lootshop.services.rewards import RewardGenerator


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_reward_config(request: Request) -> RewardConfig:
    return request.app.state.reward_config


def get_reward_generator(request: Request) -> RewardGenerator:
    return request.app.state.reward_generator


def get_checkout_engine(
    store: InMemoryStore = Depends(get_store),
    config: RewardConfig = Depends(get_reward_config),
    generator: RewardGenerator = Depends(get_reward_generator),
) -> CheckoutEngine:
    return CheckoutEngine(store, config, generator)


def get_admin_stats_service(
    store: InMemoryStore = Depends(get_store),
    config: RewardConfig = Depends(get_reward_config),
    generator: RewardGenerator = Depends(get_reward_generator),
) -> AdminStatsService:
    return AdminStatsService(store, config, generator)
