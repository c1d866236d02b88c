"""Composition root for the SimpleShop demo.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization (explicit load from storage)
- Dependency injection
- Interactive command shell
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any

from simpleshop.adapters.cli.commands import CLICommandHandler
from simpleshop.adapters.clipboard.command import CommandClipboardAdapter
from simpleshop.adapters.export.directory import DirectoryExportSink
from simpleshop.adapters.store.json_file import JSONFileKeyValueStore
from simpleshop.adapters.store.sqlite import SQLiteKeyValueStore
from simpleshop.config import Settings, load_settings
from simpleshop.core.cart_service import CartService
from simpleshop.core.catalog import ProductCatalog
from simpleshop.core.export_service import CartExportService
from simpleshop.core.persistence import PersistenceAdapter
from simpleshop.core.ports import KeyValueStorePort
from simpleshop.core.session_service import SessionService


@dataclass
class Application:
    """Wired application state. Dropping the reference is the teardown."""

    store: KeyValueStorePort
    cart: CartService
    session: SessionService
    cli_handler: CLICommandHandler


def build_store(settings: Settings) -> KeyValueStorePort:
    """Instantiate the configured key-value store adapter.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    logger = logging.getLogger(__name__)
    if settings.store_backend == "sqlite":
        logger.info(f"Key-value store: SQLite ({settings.store_sqlite_path})")
        return SQLiteKeyValueStore(db_path=settings.store_sqlite_path)
    if settings.store_backend == "json_file":
        logger.info(f"Key-value store: JSON file ({settings.store_json_path})")
        return JSONFileKeyValueStore(path=settings.store_json_path)
    raise ValueError(f"Unknown store backend: {settings.store_backend}")


async def build_application(
    settings: Settings, store: KeyValueStorePort | None = None
) -> Application:
    """Wire adapters and core services, then load persisted state.

    Args:
        settings: Validated settings.
        store: Key-value store to use instead of the configured backend.

    Returns:
        Application with cart and session loaded from storage.
    """
    if store is None:
        store = build_store(settings)

    persistence = PersistenceAdapter(store)
    catalog = ProductCatalog()

    cart = CartService(persistence, key=settings.cart_key)
    session = SessionService(persistence, key=settings.session_key)
    await cart.initialize()
    await session.initialize()

    exporter = CartExportService(
        cart=cart,
        sink=DirectoryExportSink(export_dir=settings.export_dir),
        clipboard=CommandClipboardAdapter(command=settings.clipboard_command),
    )

    cli_handler = CLICommandHandler(
        catalog=catalog,
        cart=cart,
        session=session,
        exporter=exporter,
        currency_symbol=settings.currency_symbol,
    )
    return Application(store=store, cart=cart, session=session, cli_handler=cli_handler)


async def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        cli_handler: CLICommandHandler instance.
        command: Command name.
        args: Command arguments.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized or a required argument is missing.
    """

    def _int_arg(name: str) -> int:
        if name not in args:
            raise ValueError(f"Missing required parameter: {name}")
        value = args[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Parameter {name} must be an integer, got {value!r}")
        return value

    def _product_id() -> int:
        return _int_arg("product_id")

    if command == "products":
        return await cli_handler.list_products(
            category=args.get("category", "All"),
            query=args.get("query", ""),
            output_format=args.get("format", "text"),
        )

    elif command == "details":
        return await cli_handler.product_details(_product_id())

    elif command == "add":
        return await cli_handler.add_to_cart(_product_id())

    elif command == "remove":
        return await cli_handler.remove_from_cart(_product_id())

    elif command == "qty":
        return await cli_handler.change_quantity(_product_id(), _int_arg("quantity"))

    elif command == "cart":
        return await cli_handler.show_cart(output_format=args.get("format", "text"))

    elif command == "total":
        return await cli_handler.cart_total()

    elif command == "clear":
        return await cli_handler.clear_cart()

    elif command == "export":
        return await cli_handler.export_cart()

    elif command == "copy":
        return await cli_handler.copy_cart()

    elif command == "pay":
        return await cli_handler.pay()

    elif command == "login":
        return await cli_handler.login(
            email=args.get("email", ""),
            password=args.get("password", ""),
            demo=bool(args.get("demo", False)),
        )

    elif command == "logout":
        return await cli_handler.logout()

    elif command == "whoami":
        return await cli_handler.whoami()

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  products
    List products. Optional: category (All, Cloths, Grocery, Games), query, format

    Example: products {"category": "Games", "query": "action"}

  details
    Show one product. Required: product_id

    Example: details {"product_id": 3}

  add
    Add one unit of a product to the cart. Required: product_id

    Example: add {"product_id": 3}

  remove
    Remove a product from the cart. Required: product_id

  qty
    Set a cart line's quantity (0 or less removes it).
    Required: product_id, quantity

    Example: qty {"product_id": 3, "quantity": 2}

  cart
    Show the cart and its total. Optional: format (text, json)

  total
    Show the cart total.

  clear
    Empty the cart.

  export
    Save the cart as cart.json in the export directory.

  copy
    Copy the cart JSON to the clipboard.

  pay
    Demo checkout. No payment is taken.

  login
    Demo login; any non-empty email and password are accepted.
    Required: email, password (or demo: true)

    Example: login {"email": "a@b.com", "password": "x"}

  logout
    End the session. The cart is kept.

  whoami
    Show the logged-in email.

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for shop commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive shop. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            command_line = await loop.run_in_executor(None, input, "shop> ")
            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting shop")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            if not isinstance(args, dict):
                logger.error("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            try:
                result = await _execute_cli_command(cli_handler, command, args)
                print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
            except (ValueError, TypeError) as e:
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            logger.info("EOF received, exiting shop")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the shell.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate adapters and core services, loading persisted state
    4. Run the interactive shell until exit

    Raises:
        ValidationError: On invalid configuration.
    """
    settings = load_settings()

    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Loading SimpleShop...")

    app = await build_application(settings)

    try:
        current = app.session.current
        if current is not None:
            logger.info(f"Welcome back, {current.email}")
        await _run_cli_interactive(app.cli_handler)
    finally:
        await app.store.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
