def run():
    """
    Call once before anything else touches the package, from:
        the http launcher
        the test session
        one-off scripts
    """
    from loguru import logger

    from salesdesk.common.logs import configure_logging

    configure_logging()
    configure_models()

    logger.info('application setup complete ✅')


def configure_models():
    """
    Imports every models.py so the declarative metadata knows all tables and
    the foreign keys between them (demo -> account -> account size)
    """
    from salesdesk.common.model import import_model_modules

    import_model_modules()
