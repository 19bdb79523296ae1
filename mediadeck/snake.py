"""A small snake game on a grid of square cells."""

from __future__ import annotations

import enum
import random
from collections import deque
from typing import NamedTuple


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Collision(enum.Enum):
    NONE = "none"
    FOOD = "food"
    WALL = "wall"
    SELF = "self"


class Point(NamedTuple):
    x: int
    y: int


class SnakeGame:
    """Game state: the snake (head first), the food, direction and score.

    Coordinates are in pixels; each cell is ``scale`` pixels square and the
    outermost ``scale`` pixels of the playfield form the wall.
    """

    def __init__(self, width: int = 128, height: int = 32, scale: int = 2, seed: int | None = None) -> None:
        self.width = width
        self.height = height
        self.scale = scale
        self._rng = random.Random(seed)
        cx, cy = width // 2, height // 2
        self.snake: deque[Point] = deque(
            Point(cx - scale * offset, cy) for offset in range(3)
        )
        self.direction = Direction.RIGHT
        self.score = 0
        self.food = Point(0, 0)
        self.generate_food()

    @property
    def head(self) -> Point:
        return self.snake[0]

    def turn(self, direction: Direction) -> bool:
        """Change direction unless it would reverse the snake; report success."""
        if direction is _OPPOSITE[self.direction]:
            return False
        self.direction = direction
        return True

    def move(self) -> None:
        """Advance the head one cell and drop the tail."""
        x, y = self.head
        if self.direction is Direction.UP:
            y -= self.scale
        elif self.direction is Direction.DOWN:
            y += self.scale
        elif self.direction is Direction.LEFT:
            x -= self.scale
        else:
            x += self.scale
        self.snake.appendleft(Point(x, y))
        self.snake.pop()

    def check_collision(self) -> Collision:
        """What the head has run into, food taking precedence."""
        head = self.head
        if head == self.food:
            return Collision.FOOD
        if any(head == segment for segment in list(self.snake)[1:]):
            return Collision.SELF
        if (
            head.x >= self.width - self.scale
            or head.x <= 0
            or head.y >= self.height - self.scale
            or head.y <= 0
        ):
            return Collision.WALL
        return Collision.NONE

    def _placeable(self, point: Point) -> bool:
        s = self.scale
        inside = s < point.x < self.width - s and s < point.y < self.height - s
        return inside and point not in self.snake

    def generate_food(self) -> Point:
        """Place food on a free cell strictly inside the walls."""
        s = self.scale
        candidates = (
            Point(x, y)
            for x in range(0, self.width, s)
            for y in range(0, self.height, s)
        )
        if not any(self._placeable(point) for point in candidates):
            raise RuntimeError("no free cell left for food")
        while True:
            x = self._rng.randint(s, self.width - s) // s * s
            y = self._rng.randint(s, self.height - s) // s * s
            point = Point(x, y)
            if self._placeable(point):
                self.food = point
                return point

    def step(self) -> Collision:
        """Advance one tick, growing and scoring when food is eaten."""
        tail = self.snake[-1]
        self.move()
        collision = self.check_collision()
        if collision is Collision.FOOD:
            self.generate_food()
            self.snake.append(tail)
            self.score += 1
        return collision