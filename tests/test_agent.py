"""Tests for virus_sim.agents.agent."""

import dataclasses

import numpy as np
import pytest

from virus_sim import Agent, Direction, Grid, HealthState


def placed_agent(grid, x, y, agent_id=0, **kwargs):
    agent = Agent(id=agent_id, x=x, y=y, **kwargs)
    grid.place(x, y, agent_id)
    return agent


class TestDirection:
    def test_vectors_use_screen_coordinates(self):
        assert Direction.RIGHT.to_vec() == (1, 0)
        assert Direction.LEFT.to_vec() == (-1, 0)
        assert Direction.DOWN.to_vec() == (0, 1)
        assert Direction.UP.to_vec() == (0, -1)

    def test_others_excludes_self(self):
        for direction in Direction:
            others = direction.others()
            assert len(others) == 3
            assert direction not in others


class TestHealthState:
    def test_only_susceptible_to_infected_is_valid(self):
        valid = [
            (a, b) for a in HealthState for b in HealthState if a.can_transition_to(b)
        ]
        assert valid == [(HealthState.SUSCEPTIBLE, HealthState.INFECTED)]


class TestResolveDirection:
    def test_keeps_heading_when_path_is_free(self, rng):
        grid = Grid(10, 10)
        agent = placed_agent(grid, 5, 5, direction=Direction.RIGHT)
        agent.resolve_direction(grid, rng, min_step=20)
        assert agent.direction == Direction.RIGHT

    @pytest.mark.parametrize("seed", range(10))
    def test_blocked_by_edge_picks_other_direction(self, seed):
        grid = Grid(10, 10)
        agent = placed_agent(grid, 9, 5, direction=Direction.RIGHT)
        agent.resolve_direction(grid, np.random.default_rng(seed), min_step=20)
        assert agent.direction != Direction.RIGHT

    @pytest.mark.parametrize("seed", range(10))
    def test_blocked_redirect_draws_from_the_other_three(self, seed):
        grid = Grid(10, 10)
        agent = placed_agent(grid, 5, 5, direction=Direction.UP)
        placed_agent(grid, 5, 4, agent_id=1)

        expected = Direction.UP.others()[int(np.random.default_rng(seed).integers(0, 3))]
        agent.resolve_direction(grid, np.random.default_rng(seed), min_step=20)
        assert agent.direction == expected

    @pytest.mark.parametrize("seed", range(10))
    def test_lounging_redirect_draws_from_all_four(self, seed):
        grid = Grid(10, 10)
        agent = placed_agent(
            grid, 5, 5, direction=Direction.LEFT, lounges=True, steps_since_redirect=21
        )

        expected = Direction(int(np.random.default_rng(seed).integers(0, 4)))
        agent.resolve_direction(grid, np.random.default_rng(seed), min_step=20)

        assert agent.direction == expected
        if expected == Direction.LEFT:
            assert agent.steps_since_redirect == 21
        else:
            assert agent.steps_since_redirect == 0

    def test_lounging_waits_until_threshold_is_exceeded(self, rng):
        grid = Grid(10, 10)
        agent = placed_agent(
            grid, 5, 5, direction=Direction.LEFT, lounges=True, steps_since_redirect=20
        )
        agent.resolve_direction(grid, rng, min_step=20)
        assert agent.direction == Direction.LEFT
        assert agent.steps_since_redirect == 20

    def test_non_lounging_agent_ignores_step_counter(self, rng):
        grid = Grid(10, 10)
        agent = placed_agent(
            grid, 5, 5, direction=Direction.LEFT, lounges=False, steps_since_redirect=100
        )
        agent.resolve_direction(grid, rng, min_step=20)
        assert agent.direction == Direction.LEFT


class TestTryMove:
    def test_move_updates_position_and_grid(self):
        grid = Grid(10, 10)
        agent = placed_agent(grid, 5, 5, direction=Direction.DOWN)

        assert agent.try_move(grid)

        assert agent.position == (5, 6)
        assert grid.occupant(5, 5) is None
        assert grid.occupant(5, 6) == 0

    def test_next_position_does_not_move(self):
        agent = Agent(id=0, x=2, y=2, direction=Direction.LEFT)
        assert agent.next_position() == (1, 2)
        assert agent.position == (2, 2)

    def test_blocked_move_is_a_no_op(self):
        grid = Grid(10, 10)
        agent = placed_agent(grid, 5, 5, direction=Direction.RIGHT, lounges=True)
        placed_agent(grid, 6, 5, agent_id=1)

        assert not agent.try_move(grid)

        assert agent.position == (5, 5)
        assert grid.occupant(5, 5) == 0
        assert grid.occupant(6, 5) == 1
        assert agent.steps_since_redirect == 0

    def test_step_counter_only_for_lounging_agents(self):
        grid = Grid(10, 10)
        lounging = placed_agent(grid, 0, 0, direction=Direction.RIGHT, lounges=True)
        wandering = placed_agent(grid, 0, 5, agent_id=1, direction=Direction.RIGHT)

        for _ in range(3):
            lounging.try_move(grid)
            wandering.try_move(grid)

        assert lounging.steps_since_redirect == 3
        assert wandering.steps_since_redirect == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_agent_with_no_free_neighbour_stays_put(self, seed):
        grid = Grid(1, 1)
        agent = placed_agent(grid, 0, 0, direction=Direction.RIGHT)

        agent.resolve_direction(grid, np.random.default_rng(seed), min_step=20)
        moved = agent.try_move(grid)

        assert not moved
        assert agent.direction != Direction.RIGHT
        assert agent.position == (0, 0)
        assert grid.occupant(0, 0) == 0


class TestInfect:
    def test_susceptible_becomes_infected(self):
        agent = Agent(id=0, x=0, y=0, health=HealthState.SUSCEPTIBLE)
        assert agent.infect()
        assert agent.health == HealthState.INFECTED

    @pytest.mark.parametrize("health", [HealthState.INFECTED, HealthState.IMMUNE])
    def test_terminal_states_do_not_change(self, health):
        agent = Agent(id=0, x=0, y=0, health=health)
        assert not agent.infect()
        assert agent.health == health


class TestAgentView:
    def test_view_is_immutable(self):
        agent = Agent(id=3, x=1, y=2, direction=Direction.UP, health=HealthState.IMMUNE)
        view = agent.view()

        assert view.position == (1, 2)
        assert view.health == HealthState.IMMUNE
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.position = (0, 0)

    def test_view_does_not_follow_agent(self):
        agent = Agent(id=0, x=1, y=1)
        view = agent.view()
        agent.x = 4
        assert view.position == (1, 1)

    def test_to_dict(self):
        agent = Agent(id=2, x=1, y=1, direction=Direction.DOWN, lounges=True)
        assert agent.to_dict() == {
            "id": 2,
            "position": (1, 1),
            "direction": 1,
            "lounges": True,
            "health": int(HealthState.SUSCEPTIBLE),
            "steps_since_redirect": 0,
        }
