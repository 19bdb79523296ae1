from collections import deque

import pytest

from mediadeck.snake import Collision, Direction, Point, SnakeGame


def make_game(seed=1):
    return SnakeGame(width=20, height=20, scale=2, seed=seed)


def test_initial_snake_is_horizontal_and_centred():
    game = make_game()
    assert list(game.snake) == [Point(10, 10), Point(8, 10), Point(6, 10)]
    assert game.direction is Direction.RIGHT
    assert game.score == 0


def test_food_is_on_grid_inside_walls_and_off_snake():
    for seed in range(30):
        game = make_game(seed)
        fx, fy = game.food
        assert fx % game.scale == 0 and fy % game.scale == 0
        assert game.scale < fx < game.width - game.scale
        assert game.scale < fy < game.height - game.scale
        assert game.food not in game.snake


def test_same_seed_gives_same_food():
    first = make_game(7)
    second = make_game(7)
    assert first.food == second.food
    assert first.scale < first.food.x < first.width - first.scale
    assert first.scale < first.food.y < first.height - first.scale
    first.food = Point(first.head.x + first.scale, first.head.y)
    second.food = Point(second.head.x + second.scale, second.head.y)
    assert first.step() is Collision.FOOD
    assert second.step() is Collision.FOOD
    assert first.food == second.food
    assert first.food not in first.snake


def test_reverse_turn_rejected():
    game = make_game()
    assert game.turn(Direction.LEFT) is False
    assert game.direction is Direction.RIGHT
    assert game.turn(Direction.UP) is True
    assert game.direction is Direction.UP
    assert game.turn(Direction.DOWN) is False


def test_move_keeps_length_and_advances_head():
    game = make_game()
    before = list(game.snake)
    game.move()
    assert len(game.snake) == len(before)
    assert game.head == Point(before[0].x + game.scale, before[0].y)
    assert list(game.snake)[1:] == before[:-1]


def test_eating_food_grows_and_scores():
    game = make_game()
    tail = game.snake[-1]
    game.food = Point(game.head.x + game.scale, game.head.y)
    assert game.step() is Collision.FOOD
    assert len(game.snake) == 4
    assert game.snake[-1] == tail
    assert game.score == 1
    assert game.food not in game.snake


def test_running_into_wall():
    game = make_game()
    game.food = Point(4, 16)
    results = []
    for _ in range(10):
        result = game.step()
        results.append(result)
        if result is not Collision.NONE:
            break
    assert results[-1] is Collision.WALL
    assert game.head.x == game.width - game.scale
    assert all(r is Collision.NONE for r in results[:-1])


def test_running_into_self():
    game = make_game()
    game.snake = deque([Point(10, 10), Point(10, 12), Point(12, 12), Point(12, 10), Point(12, 8)])
    game.direction = Direction.RIGHT
    game.food = Point(4, 4)
    assert game.step() is Collision.SELF


def test_no_collision_in_open_field():
    game = make_game()
    game.food = Point(4, 4)
    assert game.step() is Collision.NONE
    assert game.check_collision() is Collision.NONE