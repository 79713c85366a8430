"""Lane geometry: fixed lane centers across the playfield width."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LaneModel:
    """Maps lane indices to x-coordinates.

    Lanes split the playfield into equal columns; each lane's x is the
    middle of its column (W/8, 3W/8, 5W/8, 7W/8 for four lanes).
    """

    width: float
    count: int = 4
    centers: tuple[float, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        lane_width = self.width / self.count
        centers = tuple(lane_width * (i + 0.5) for i in range(self.count))
        object.__setattr__(self, "centers", centers)

    @property
    def first(self) -> int:
        return 0

    @property
    def last(self) -> int:
        return self.count - 1

    def center_x(self, index: int) -> float:
        """Lane center for ``index``. Out-of-range indices are a caller bug."""
        if not 0 <= index < self.count:
            raise ValueError(f"Lane index {index} outside 0..{self.last}")
        return self.centers[index]
