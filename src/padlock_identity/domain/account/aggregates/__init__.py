from padlock_identity.domain.account.aggregates.account import DEFAULT_LOCALE, Account

__all__ = ["DEFAULT_LOCALE", "Account"]
