# TourneyKit
# Copyright (C) 2025  TourneyKit developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
APP_NAME = "TourneyKit"

# League points
WIN_POINTS = 3
DRAW_POINTS = 1

# Fewest teams a league or knockout can be generated from
MIN_TEAMS = 2

# Knockout bye handling
BYE = "BYE"  # stands in for the missing opponent
BYE_ID_SUFFIX = "bye"

# Match sides for score entry
SIDE_A = "A"
SIDE_B = "B"
SIDES = (SIDE_A, SIDE_B)

# Round labels
FINAL_ROUND_LABEL = "Final"
ROUND_LABEL = "Round {number}"

# Tournament modes
MODE_LEAGUE = "league"
MODE_KNOCKOUT = "knockout"
DEFAULT_MODE = MODE_LEAGUE

# Persistence keys
KEY_TEAMS = "teams"
KEY_MODE = "mode"
KEY_MATCHES = "matches"
KEY_KNOCKOUT_ROUNDS = "knockoutRounds"
KEY_SAVED_AT = "savedAt"
SESSION_KEYS = (KEY_TEAMS, KEY_MODE, KEY_MATCHES, KEY_KNOCKOUT_ROUNDS)

# Configuration
DEFAULT_STORE_FILE = "tournament.json"
STORE_ENV_VAR = "TOURNEYKIT_STORE"
LOG_LEVEL_ENV_VAR = "TOURNEYKIT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
