# cardring/app/ui.py

from cardring.common.constants import GENERATE_KEYWORD


def welcome_script() -> str:
    return "welcome to CARDRING! first to collect four of a kind wins."


def get_player_count() -> int:
    count_str = ''
    while not (count_str.isdigit() and int(count_str) >= 1):
        count_str = input("Please enter the number of players: ").strip()
    return int(count_str)


def ask_pack_location() -> str:
    """
    Returns a path, or GENERATE_KEYWORD to build a random pack.
    """
    while True:
        raw = input(f"Please enter location of pack to load (or type '{GENERATE_KEYWORD}'): ").strip()
        if raw.lower() == GENERATE_KEYWORD:
            return GENERATE_KEYWORD
        if raw:
            return raw
