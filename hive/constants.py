"""Game constants shared across modules.

This module contains the player numbers, the unplaced piece bag and the
opening cells used by both the stateless move generator (stateless_logic)
and the immutable game state (HiveState).
"""

# Player numbers
PLAYER_1 = 1
PLAYER_2 = 2

# Unplaced piece bag per player, in inventory order
STANDARD_PIECES = {"queen": 1, "beetle": 2, "ant": 3, "grasshopper": 3, "spider": 2}

# Opening cells (a, b, c): first placement of the game, first placement of player 2
FIRST_CELL = (0, 0, 0)
SECOND_CELL = (0, 0, 1)

# Queen rule: from this turn on player 1 must have a queen on the board when player 2
# is to move, and after it both players must
QUEEN_DEADLINE_TURN = 4

# Number of slides a spider makes
SPIDER_STEPS = 3
