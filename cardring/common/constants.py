# cardring/common/constants.py

import os

# Environment switches:
#   TURN_DELAY=<seconds> pause between two turns of the same player
#   CARDRING_OUTPUT_DIR=<dir> where player/deck output files and generated packs go
TURN_DELAY_SEC = float(os.getenv("TURN_DELAY", "0.01"))
OUTPUT_DIR = os.getenv("CARDRING_OUTPUT_DIR", ".")

# Hand / pack sizes
HAND_SIZE = 4
CARDS_PER_PLAYER = 2 * HAND_SIZE     # 4 dealt to the hand + 4 dealt to the deck

# Random packs draw ranks uniformly from [0, RANK_SPREAD * n)
RANK_SPREAD = 2

GENERATE_KEYWORD = "generate"
RANDOM_PACK_FILE = "random_pack.txt"

# Log stream ids / output files
PLAYER_STREAM = "player{id}"
DECK_STREAM = "deck{id}"
OUTPUT_FILE = "{stream}_output.txt"
