import logging

from utils.logging_config import setup_logging, silence_sql_loggers

# Initialize centralized logging configuration
setup_logging()

from app import main

# SQLAlchemy resets logger levels on engine creation
silence_sql_loggers()

if __name__ == '__main__':
    logging.info("Starting marketplace API")
    main()
