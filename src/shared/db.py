"""Schema management for SQL-backed providers.

The memory provider needs no schema; for sqlite/postgresql providers the
tables are created from the SQLAlchemy metadata protean builds when each
repository's DAO is first touched.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

from shared.logging import get_logger

logger = get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _touch_daos(domain: Domain, provider_name: str) -> None:
    registries = (
        domain.registry.aggregates,
        domain.registry.entities,
        domain.registry.projections,
    )
    for registry in registries:
        for _, record in registry.items():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018

    # Outbox tables are registered internally per provider
    if hasattr(domain, "_outbox_repos") and provider_name in domain._outbox_repos:
        domain._outbox_repos[provider_name]._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every SQL provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            _touch_daos(domain, provider.name)
            provider._metadata.create_all(engine)
            logger.info("Database schema created", domain=domain.name, provider=provider.name)


def drop_db(domain: Domain) -> None:
    """Drop tables for every SQL provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", domain=domain.name, provider=provider.name)


def reset_data(domain: Domain) -> None:
    """Wipe all stored data of the domain (providers, brokers, event store)."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()

        for _, broker in domain.brokers.items():
            broker._data_reset()

        domain.event_store.store._data_reset()
