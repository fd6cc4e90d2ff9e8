# game_catalog.py

import logging

# Order matters: analyses always report intelligences in this order.
MULTIPLE_INTELLIGENCES = [
    {"id": "Logical-Mathematical", "name": "Logical-Mathematical", "description": "Reasoning, calculating, logical analysis."},
    {"id": "Visual-Spatial", "name": "Visual-Spatial", "description": "Thinking in pictures, visualizing outcomes."},
    {"id": "Bodily-Kinesthetic", "name": "Bodily-Kinesthetic", "description": "Using the body effectively, physical coordination."},
    {"id": "Linguistic-Verbal", "name": "Linguistic-Verbal", "description": "Using words effectively, understanding language."},
    {"id": "Musical", "name": "Musical", "description": "Sensitivity to rhythm, pitch, melody."},
    {"id": "Interpersonal", "name": "Interpersonal", "description": "Understanding and interacting with others."},
    {"id": "Intrapersonal", "name": "Intrapersonal", "description": "Understanding oneself, self-reflection."},
    {"id": "Naturalistic", "name": "Naturalistic", "description": "Understanding nature, recognizing patterns in the natural world."},
]

INTELLIGENCE_IDS = [mi["id"] for mi in MULTIPLE_INTELLIGENCES]

GENERAL_COGNITIVE_SKILL = "General Cognitive Skill"

_INTELLIGENCE_ALIASES = {
    "linguistic": "Linguistic-Verbal",
    "linguistic_verbal": "Linguistic-Verbal",
    "verbal": "Linguistic-Verbal",
    "logical": "Logical-Mathematical",
    "logical_mathematical": "Logical-Mathematical",
    "mathematical": "Logical-Mathematical",
    "spatial": "Visual-Spatial",
    "visual": "Visual-Spatial",
    "visual_spatial": "Visual-Spatial",
    "bodily": "Bodily-Kinesthetic",
    "kinesthetic": "Bodily-Kinesthetic",
    "bodily_kinesthetic": "Bodily-Kinesthetic",
    "musical": "Musical",
    "interpersonal": "Interpersonal",
    "intrapersonal": "Intrapersonal",
    "naturalistic": "Naturalistic",
}

# The first PROFILING_GAMES_COUNT entries are the profiling games; their ids
# must match the games named in the gameplay analysis rubric.
PROFILING_GAMES_COUNT = 8

COGNITIVE_GAMES = [
    {
        "id": "MATH_TWINS",
        "title": "Math Twins",
        "description": "Matching game pairing equivalent mathematical expressions. Uses adaptive difficulty to train both basic math skills and working memory under cognitive load.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "JIGSAW_9",
        "title": "Jigsaw 9",
        "description": "Digital jigsaw puzzle with rotatable pieces and adjustable difficulty. Trains mental rotation skills by requiring players to manipulate puzzle pieces in both 2D and 3D space.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "WHACK_A_MOLE",
        "title": "Reaction Field",
        "description": "Timed target-hitting game testing reflexes and hand-eye coordination. Measures and improves visual-motor reaction time with millisecond precision.",
        "intelligences": ["Bodily-Kinesthetic"],
    },
    {
        "id": "WORDS_BIRDS",
        "title": "Words Birds",
        "description": "Word recognition challenge where players identify flying words before they disappear. Specifically targets rapid word recognition under time pressure, training both visual word processing and lexical access speed.",
        "intelligences": ["Linguistic-Verbal"],
    },
    {
        "id": "MELODY_MAYHEM",
        "title": "Melody Mayhem",
        "description": "Rhythm matching game where players replicate musical patterns. Trains both rhythm perception and auditory working memory through layered musical patterns.",
        "intelligences": ["Musical"],
    },
    {
        "id": "CHESS_PVP",
        "title": "Chess",
        "description": "Strategic board game played against opponents or AI. Specifically trains perspective-taking and anticipatory social cognition through move prediction.",
        "intelligences": ["Interpersonal", "Logical-Mathematical"],
    },
    {
        "id": "SOLITAIRE",
        "title": "Solitaire",
        "description": "Classic card organization game played individually. Trains executive function through continuous self-assessment and strategy adjustment.",
        "intelligences": ["Intrapersonal", "Logical-Mathematical"],
    },
    {
        "id": "ANT_ESCAPE",
        "title": "Ant Escape",
        "description": "Navigation challenge through environmental obstacles, focusing on adaptive planning.",
        "intelligences": ["Naturalistic", "Visual-Spatial"],
    },
    {
        "id": "CROSSROADS",
        "title": "Crossroads",
        "description": "Traffic management simulation requiring strategic lane allocation. Enhances logical reasoning and spatial planning.",
        "intelligences": ["Logical-Mathematical", "Visual-Spatial", "Interpersonal"],
    },
    {
        "id": "WINDOW_CLEANER",
        "title": "Butterfly Hunter",
        "description": "Tracking game where players capture moving targets across a grid. Improves hand-eye coordination and visual tracking.",
        "intelligences": ["Visual-Spatial", "Bodily-Kinesthetic"],
    },
    {
        "id": "LANE_SPLITTER",
        "title": "Lane Changer",
        "description": "Driving simulation requiring rapid lane switching decisions. Tests problem-solving and reaction speed.",
        "intelligences": ["Bodily-Kinesthetic", "Visual-Spatial", "Logical-Mathematical"],
    },
    {
        "id": "WORD_QUEST",
        "title": "Word Quest",
        "description": "Word search puzzle requiring players to find hidden terms in letter grids. Enhances vocabulary and logical deduction.",
        "intelligences": ["Linguistic-Verbal", "Logical-Mathematical"],
    },
    {
        "id": "CANDY_FACTORY",
        "title": "Candy Factory",
        "description": "Resource management game where players optimize candy production lines under time constraints.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "PIECE_MAKING",
        "title": "Piece Making",
        "description": "Assembly puzzle requiring players to construct objects from scattered parts.",
        "intelligences": ["Visual-Spatial", "Logical-Mathematical"],
    },
    {
        "id": "WATER_LILIES",
        "title": "Water Lilies",
        "description": "Ecosystem simulation where players balance pond life by managing lily pad growth.",
        "intelligences": ["Naturalistic"],
    },
    {
        "id": "MOUSE_CHALLENGE",
        "title": "Mouse Challenge",
        "description": "Pathfinding game where players navigate a mouse through maze obstacles.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "MAHJONG",
        "title": "Mahjong",
        "description": "Tile-matching game pairing identical symbols under time pressure.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "RIVAL_ORBS",
        "title": "Shore Dangers",
        "description": "Competitive resource collection game with environmental hazards.",
        "intelligences": ["Interpersonal", "Naturalistic"],
    },
    {
        "id": "MATH_SUBTRACTION",
        "title": "Minus Malus",
        "description": "Fast-paced arithmetic drills focusing on subtraction skills.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "MATH_LINES",
        "title": "Numbers line",
        "description": "Number sequence completion game with dynamic intervals.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "DRAGSTER_RACING",
        "title": "Dragster Racing",
        "description": "Timed acceleration challenge with gear-shifting mechanics.",
        "intelligences": ["Bodily-Kinesthetic"],
    },
    {
        "id": "TRAFFIC_MANAGER",
        "title": "Traffic Manager",
        "description": "Multi-lane coordination game with dynamic obstacle generation.",
        "intelligences": ["Logical-Mathematical", "Interpersonal"],
    },
    {
        "id": "TENNIS_BOMB",
        "title": "Tennis Bomb",
        "description": "Ball-hitting game with explosive targets and trajectory arcs.",
        "intelligences": ["Bodily-Kinesthetic"],
    },
    {
        "id": "TENNIS_TARGET",
        "title": "Tennis Target",
        "description": "Precision aiming game with moving target zones.",
        "intelligences": ["Bodily-Kinesthetic", "Visual-Spatial"],
    },
    {
        "id": "TENNIS_BULLING",
        "title": "Tennis Bowling",
        "description": "Hybrid sport game combining tennis mechanics with pin knockdown.",
        "intelligences": ["Bodily-Kinesthetic"],
    },
    {
        "id": "TWIST_IT",
        "title": "Twist It",
        "description": "Rotation puzzle requiring angular alignment of geometric shapes.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "SNAKE",
        "title": "Neuron Madness",
        "description": "Modernized snake game with branching path mechanics.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "SIMON_SAYS",
        "title": "Drive me crazy",
        "description": "Memory sequence replication game with color-light patterns.",
        "intelligences": ["Musical", "Logical-Mathematical"],
    },
    {
        "id": "NAME_ME",
        "title": "Visual Crossword",
        "description": "Object naming game using fragmented visual clues.",
        "intelligences": ["Linguistic-Verbal"],
    },
    {
        "id": "PENGUIN_MAZE",
        "title": "Penguin Explorer",
        "description": "3D navigation through complex ice mazes.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "SCRAMBLED",
        "title": "Scrambled",
        "description": "Players unscramble letters to form correct words.",
        "intelligences": ["Linguistic-Verbal"],
    },
    {
        "id": "AUDIO_TENNIS",
        "title": "Melodic Tennis",
        "description": "Sound-based reaction game with pitch variations.",
        "intelligences": ["Musical"],
    },
    {
        "id": "PIRATE_ISLAND",
        "title": "Treasure Island",
        "description": "Nature-based exploration game.",
        "intelligences": ["Naturalistic"],
    },
    {
        "id": "MIX_AND_MATCH",
        "title": "Match it!",
        "description": "Pattern recognition game pairing related visual concepts across categories.",
        "intelligences": ["Visual-Spatial", "Logical-Mathematical"],
    },
    {
        "id": "SLICE_AND_DROP",
        "title": "Slice and Drop",
        "description": "Precision cutting game with physics-based object splitting.",
        "intelligences": ["Bodily-Kinesthetic"],
    },
    {
        "id": "FRESHQUEEZE",
        "title": "Fresh Squeeze",
        "description": "Timed fruit-matching game requiring color and shape coordination.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "STEADY_MOVES",
        "title": "Perfect Tension",
        "description": "Fine motor control challenge navigating fragile objects through obstacles.",
        "intelligences": ["Bodily-Kinesthetic"],
    },
    {
        "id": "BEE_BALLOON",
        "title": "Bee Balloon",
        "description": "Navigation game steering balloons through floral obstacle courses.",
        "intelligences": ["Visual-Spatial", "Naturalistic"],
    },
    {
        "id": "BREAKOUT3D",
        "title": "Gem Breaker 3D",
        "description": "Three-dimensional brick breaker with depth perception challenges.",
        "intelligences": ["Visual-Spatial", "Bodily-Kinesthetic"],
    },
    {
        "id": "BLOCKBUILDER",
        "title": "Star Architect",
        "description": "Volumetric construction game with blueprint interpretation.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "BLOCKOUT",
        "title": "Cube Foundry",
        "description": "Spatial reasoning game extracting shapes from solid blocks.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "MANDALA",
        "title": "Mandala",
        "description": "Symmetrical pattern completion with radial design elements.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "CUT_THE_CAKE",
        "title": "Color Bee",
        "description": "Fraction division game with dynamic visual partitioning.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "DIGITS",
        "title": "Digits",
        "description": "Working memory challenge recalling number sequences with interference.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "PUZZLE_2D",
        "title": "Puzzles",
        "description": "Traditional jigsaw puzzles with adjustable piece counts.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "CANDY_LINE_UP",
        "title": "Candy Line Up",
        "description": "Pattern sequencing game with color and shape variables.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "SAVE_THE_FROG",
        "title": "Happy Hopper",
        "description": "Ecosystem navigation game avoiding predators and environmental hazards.",
        "intelligences": ["Naturalistic"],
    },
    {
        "id": "PUZZLE_3D",
        "title": "3D Art Puzzle",
        "description": "Volumetric assembly of artistic sculptures from fragments.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "ECHO_RACE",
        "title": "Color Rush",
        "description": "Audio-visual reaction game matching colors to sound frequencies.",
        "intelligences": ["Musical"],
    },
    {
        "id": "FIND_THE_PUP",
        "title": "Find Your Pet",
        "description": "Object permanence challenge locating hidden animals in scenes.",
        "intelligences": ["Naturalistic"],
    },
    {
        "id": "COLOR_FRENZY",
        "title": "Color Frenzy",
        "description": "Rapid color-word Stroop test with escalating difficulty.",
        "intelligences": ["Linguistic-Verbal"],
    },
    {
        "id": "SPACE_RESCUE",
        "title": "Space Rescue",
        "description": "Gravity-based navigation puzzle saving astronauts in orbital mechanics.",
        "intelligences": ["Visual-Spatial", "Logical-Mathematical"],
    },
    {
        "id": "NEON_LIGHTS",
        "title": "Neon Lights",
        "description": "Visual memory game recreating light sequence patterns.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "NEURON_GRAPH",
        "title": "Synaptix",
        "description": "Neural pathway visualization game connecting cognitive concepts.",
        "intelligences": ["Intrapersonal"],
    },
    {
        "id": "CRAZY_FACTORY",
        "title": "Robo Factory",
        "description": "Assembly line optimization with robotic component sorting.",
        "intelligences": ["Logical-Mathematical"],
    },
    {
        "id": "ROBOT",
        "title": "Crystal Miner",
        "description": "Resource collection game with terrain deformation mechanics.",
        "intelligences": ["Visual-Spatial"],
    },
    {
        "id": "CHESS",
        "title": "Chess Puzzle",
        "description": "Tactical chess scenarios requiring optimal move sequences.",
        "intelligences": ["Logical-Mathematical"],
    },
]

# Hybrid games shown in their own section and scored against several intelligences.
ENHANCEMENT_GAME_IDS = [
    "WORD_QUEST",
    "CROSSROADS",
    "WINDOW_CLEANER",
    "LANE_SPLITTER",
]

_GAMES_BY_ID = {game["id"]: game for game in COGNITIVE_GAMES}


def normalize_intelligence_id(value):
    """
    Maps loose spellings like 'spatial' or 'logical_mathematical' to the
    canonical intelligence id. Returns None for anything unrecognised.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if value in INTELLIGENCE_IDS:
        return value
    key = value.lower().replace("-", "_").replace(" ", "_")
    if key.endswith("_intelligence"):
        key = key[:-len("_intelligence")]
    return _INTELLIGENCE_ALIASES.get(key)


def get_game(game_id: str):
    return _GAMES_BY_ID.get(game_id)


def get_profiling_game_ids() -> list:
    return [game["id"] for game in COGNITIVE_GAMES[:PROFILING_GAMES_COUNT]]


def is_enhancement_game(game_id: str) -> bool:
    return game_id in ENHANCEMENT_GAME_IDS


def get_games_for_intelligence(intelligence: str) -> list:
    """Returns every catalog game that assesses the given intelligence."""
    intelligence_id = normalize_intelligence_id(intelligence)
    if not intelligence_id:
        return []
    return [game for game in COGNITIVE_GAMES if intelligence_id in game["intelligences"]]


def primary_intelligence_for(game_id: str) -> str:
    game = get_game(game_id)
    if not game or not game["intelligences"]:
        return GENERAL_COGNITIVE_SKILL
    return game["intelligences"][0]


def _check_catalog():
    seen = set()
    for game in COGNITIVE_GAMES:
        if game["id"] in seen:
            logging.warning(f"Duplicate game id found in COGNITIVE_GAMES: {game['id']}")
        seen.add(game["id"])
        for intelligence in game["intelligences"]:
            if intelligence not in INTELLIGENCE_IDS:
                logging.warning(f"Game '{game['title']}' (ID: {game['id']}) has an invalid intelligence id: '{intelligence}'")


_check_catalog()
