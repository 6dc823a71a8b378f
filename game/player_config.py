"""Player configuration system for the level duel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from shared.input_events import parse_action_word

PlayerType = Literal["random", "scripted", "human"]
PLAYER_TYPES = ("random", "scripted", "human")

DEFAULT_DIG_BIAS = 0.35


@dataclass
class PlayerConfig:
    """Configuration for a single player.

    Attributes:
        player_type: Type of player ('random', 'scripted', or 'human')
        name: Optional display name
        rng_seed: Random seed for this player (None = use the session seed)
        dig_bias: Probability that a random player digs instead of moving
            (dig level only)
        script: Action words replayed by a scripted player
            (up/down/left/right/dig)
    """

    player_type: PlayerType = "random"
    name: str | None = None
    rng_seed: int | None = None
    dig_bias: float = DEFAULT_DIG_BIAS
    script: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def random(cls, seed: int | None = None, dig_bias: float = DEFAULT_DIG_BIAS, name: str | None = None) -> PlayerConfig:
        """Create a random player configuration."""
        if not 0.0 <= dig_bias <= 1.0:
            raise ValueError(f"dig_bias must be between 0 and 1, got {dig_bias}")
        return cls(player_type="random", rng_seed=seed, dig_bias=dig_bias, name=name)

    @classmethod
    def human(cls, name: str | None = None) -> PlayerConfig:
        """Create a human player configuration."""
        return cls(player_type="human", name=name)

    @classmethod
    def scripted(cls, moves, name: str | None = None) -> PlayerConfig:
        """Create a scripted player configuration.

        Args:
            moves: Iterable of action words, validated eagerly
            name: Optional display name
        """
        moves = tuple(word.strip().lower() for word in moves if word.strip())
        for word in moves:
            parse_action_word(0, word)
        return cls(player_type="scripted", script=moves, name=name)


def parse_player_spec(spec: str) -> PlayerConfig:
    """Parse a player specification string into a PlayerConfig.

    Format:
        TYPE[:PARAM=VALUE,PARAM=VALUE,...]

    Examples:
        "random" -> Random player
        "random:seed=7,dig=0.5" -> Seeded random player that digs half the time
        "human" -> Human player
        "scripted:moves=down-down-right-dig" -> Replays the listed actions

    Supported parameters:
        - name (str): Display name (all types)
        - seed (int): Random seed (random)
        - dig (float): Dig probability in the dig level (random)
        - moves (str): '-' separated action words (scripted)
    """
    parts = spec.split(":", 1)
    player_type = parts[0].strip().lower()

    if player_type not in PLAYER_TYPES:
        raise ValueError(
            f"Invalid player type: {player_type}. Must be 'random', 'scripted', or 'human'"
        )

    params = {}
    if len(parts) == 2:
        for param_pair in parts[1].split(","):
            param_pair = param_pair.strip()
            if not param_pair:
                continue
            if "=" not in param_pair:
                raise ValueError(f"Invalid parameter format: {param_pair}. Expected PARAM=VALUE")
            key, value = param_pair.split("=", 1)
            key = key.strip()
            value = value.strip()

            if key == "seed":
                params[key] = int(value)
            elif key == "dig":
                params[key] = float(value)
            elif key in ["name", "moves"]:
                params[key] = value
            else:
                raise ValueError(f"Unknown parameter: {key}")

    if player_type == "random":
        if "moves" in params:
            raise ValueError("Parameter 'moves' only applies to scripted players")
        return PlayerConfig.random(
            seed=params.get("seed"),
            dig_bias=params.get("dig", DEFAULT_DIG_BIAS),
            name=params.get("name"),
        )
    if player_type == "human":
        return PlayerConfig.human(name=params.get("name"))

    if "moves" not in params:
        raise ValueError("Scripted players need a 'moves' parameter")
    return PlayerConfig.scripted(params["moves"].split("-"), name=params.get("name"))
