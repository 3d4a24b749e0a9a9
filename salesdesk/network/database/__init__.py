from salesdesk.network.database.session import db  # noqa: F401
