from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class EngineConfig:
    # Grid bounds (historically 50x50)
    max_rows: int = 50
    max_columns: int = 50
    default_rows: int = 50
    default_columns: int = 50

    # Interactive dimension controls step through min..max
    min_rows: int = 10
    min_columns: int = 10
    dimension_step: int = 5

    # Speed = steps per animation tick
    min_speed: int = 1
    max_speed: int = 11
    default_speed: int = 6

    # Presentation
    fps: int = 60
    cell_size: int = 15

    def clamp_speed(self, value: int) -> int:
        return max(self.min_speed, min(self.max_speed, int(value)))

    def as_dict(self):
        return asdict(self)


DEFAULT_CONFIG = EngineConfig()
