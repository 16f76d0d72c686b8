import logging
import logging.config


def setup_logging(config) -> logging.Logger:
    """Настройка логирования по BotConfig.get_logging_config()"""
    if config.log_to_file:
        config.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(config.get_logging_config())
    return logging.getLogger("habit_tracker")
