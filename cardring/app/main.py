# cardring/app/main.py

import os
from typing import List

from cardring.app.pack import generate_random_pack, load_pack, write_pack
from cardring.app.ui import ask_pack_location, get_player_count, welcome_script
from cardring.common.cards import Card
from cardring.common.constants import GENERATE_KEYWORD, OUTPUT_DIR, RANDOM_PACK_FILE
from cardring.common.errors import InvalidInput
from cardring.common.logging_utils import get_logger, setup_logging
from cardring.engine.game import Game
from cardring.engine.log_sink import FileSink

log = get_logger("app.main")


def _prompt_pack(n: int, output_dir: str) -> List[Card]:
    while True:
        location = ask_pack_location()
        try:
            if location == GENERATE_KEYWORD:
                os.makedirs(output_dir, exist_ok=True)
                location = os.path.join(output_dir, RANDOM_PACK_FILE)
                write_pack(location, generate_random_pack(n))
                print(f"Random pack generated and saved to {location}")
            return load_pack(location, n)
        except (InvalidInput, OSError) as e:
            print(f"{e}. Please try again.")


def main() -> None:
    setup_logging()
    print(welcome_script())

    n = get_player_count()
    pack = _prompt_pack(n, OUTPUT_DIR)

    with FileSink(OUTPUT_DIR) as sink:
        game = Game(n, pack, sink=sink)
        try:
            result = game.run()
        except KeyboardInterrupt:
            log.info("Shutting down...")
            return

    print(f"Player {result.winner_id} wins")
    log.info(f"Game over. Output files written to {os.path.abspath(OUTPUT_DIR)}")


if __name__ == "__main__":
    main()
