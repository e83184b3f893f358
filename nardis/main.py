"""Main entry point for Nardis."""

import logging
import sys

from nardis.config import Settings


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def run_demo(turns: int = 20) -> None:
    """Play a demo game where the human seat never acts."""
    from nardis.database.storage import SqlStorage
    from nardis.engine.nardis import Nardis
    from nardis.exceptions import NoActiveGameError

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    storage = SqlStorage.from_path(settings.database_path)
    try:
        try:
            game = Nardis.create_from_storage(storage, settings=settings)
            logger.info(f"Resuming saved game on turn {game.get_current_turn()}")
        except NoActiveGameError:
            game = Nardis.create_from_player("Demo", storage=storage, settings=settings)

        print("🚂 Nardis Demo 🚂")
        print("=" * 40)

        for _ in range(turns):
            game.start_turn()
            game.end_turn()
            winner = game.has_any_player_won()
            if winner:
                print(f"{winner.name} wins on turn {game.get_current_turn()}!")
                game.clear_storage()
                break

        print(f"Turn {game.get_current_turn()}")
        for player in game.players:
            stock = game.stocks.get_stock(player.id)
            print(
                f"  {player.name:<10} gold {player.gold:>6}  routes {len(player.routes):>2}"
                f"  queued {len(player.queue):>2}  net worth {player.net_worth:>6}"
                f"  share {stock.value if stock else 0:>5}"
            )
    finally:
        storage.close()


def main() -> None:
    """Run the demo for the number of turns given on the command line."""
    args = [arg for arg in sys.argv[1:] if arg != "demo"]
    turns = int(args[0]) if args else 20
    try:
        run_demo(turns)
    except Exception as e:
        logging.getLogger(__name__).exception(f"Demo failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
