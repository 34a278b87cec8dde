"""
Application entry point for Reptile Log.

This module:
- Loads settings (.env via python-dotenv, then infrastructure.config.Config).
- Configures logging and opens the configured storage backend
  (registering the MongoEngine connection first for the 'mongo' backend).
- Builds the Store; corrupt stored data stops the program here.
- Prints a stylized header and hands over to the command loop in program_reptiles.
"""

import logging
import os

from colorama import Fore # Colored terminal text (foreground colors).
from dotenv import load_dotenv

import reptile_log.data.mongo_setup as mongo_setup # MongoEngine connection setup (alias 'core').
import reptile_log.infrastructure.state as state
import reptile_log.program_reptiles as program_reptiles
from reptile_log.infrastructure.config import Config, config_by_name
from reptile_log.infrastructure.errors import PersistenceError
from reptile_log.services.storage import open_storage
from reptile_log.services.store import Store

logger = logging.getLogger(__name__)

"""
Initialize the app and run the command loop.

Returns:
    Process exit code: 0 on a normal exit, 1 when the storage is misconfigured
    or stored data could not be loaded.

The settings class is picked from config_by_name with REPTILE_LOG_ENV
(default: 'default').
"""
def main():
    load_dotenv()
    config = config_by_name.get(os.getenv('REPTILE_LOG_ENV', 'default'), Config)()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if config.STORAGE.strip().lower() == 'mongo':
        mongo_setup.global_init(config)

    try:
        storage = open_storage(config)
    except ValueError as ex:
        # Unknown REPTILE_LOG_STORAGE value.
        logger.error("Bad storage configuration: %s", ex)
        print(Fore.LIGHTRED_EX + f'Bad configuration: {ex}' + Fore.WHITE)
        return 1

    try:
        store = Store(storage)
    except PersistenceError as ex:
        # Fail fast: never continue with an empty log over data we could not read.
        logger.error("Could not load stored data: %s", ex)
        print(Fore.LIGHTRED_EX + f'Could not load your reptile log: {ex}' + Fore.WHITE)
        return 1

    state.select_default(store)

    print_header()

    try:
        program_reptiles.run(store)
    except KeyboardInterrupt:
        return 0 # Allow clean termination with Ctrl+C or the exit command.

"""Render the application banner and a short welcome message."""
def print_header():
    lizard = \
        r"""
                       __
             (\_/)    /o \___
             (o.o)   /  ____/
            _/ ^ \__/  /
           (__/ \_____/~~~~~~~~~~~<
        """

    print(Fore.WHITE + '****************  REPTILE LOG  ****************')
    print(Fore.GREEN + lizard)
    print(Fore.WHITE + '***********************************************')
    print()
    print("Welcome to Reptile Log!")
    print("Keep track of feeding, toilet, bathing and vet visits.")
    print()

# Standard Python entry-point guard.
if __name__ == '__main__':
    raise SystemExit(main())
