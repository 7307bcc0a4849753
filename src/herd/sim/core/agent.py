from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pygame.math import Vector2

if TYPE_CHECKING:
    from ..systems.lifecycle import CellFactory

BASE_RADIUS = 2
MAX_RADIUS = 8
YEARS_PER_RADIUS_STEP = 3


class Health(str, Enum):
    SOUND = "Sound"
    ILL = "Ill"


class Vaccination(str, Enum):
    NOT_VACCINATED = "NotVaccinated"
    VACCINATED = "Vaccinated"


@dataclass(slots=True)
class Age:
    """Age in years together with the age at which the cell dies.

    ``years`` never exceeds ``death_years``: growing stops at the death age and
    shortening the lifespan never goes below the current age.
    """

    years: int
    death_years: int

    def grow(self, years: int) -> None:
        self.years = min(self.years + years, self.death_years)

    def reduce_death_age(self, years: int) -> None:
        self.death_years = max(self.death_years - years, self.years)

    def is_time_to_die(self) -> bool:
        return self.years == self.death_years


@dataclass(slots=True)
class CellState:
    position: Vector2
    age: Age
    health: Health
    vaccination: Vaccination

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def radius(self) -> float:
        return float(min(self.age.years // YEARS_PER_RADIUS_STEP + BASE_RADIUS, MAX_RADIUS))

    @property
    def color(self) -> str:
        if self.health is Health.ILL:
            return "red"
        if self.vaccination is Vaccination.NOT_VACCINATED:
            return "yellow"
        if self.vaccination is Vaccination.VACCINATED:
            return "blue"
        return "gray"

    def is_within_horizontal_limits(self, min_x: float, max_x: float) -> bool:
        radius = self.radius
        return (self.position.x - radius) > min_x and (self.position.x + radius) < max_x

    def is_within_vertical_limits(self, min_y: float, max_y: float) -> bool:
        radius = self.radius
        return (self.position.y - radius) > min_y and (self.position.y + radius) < max_y


@dataclass(slots=True)
class Cell:
    id: int
    state: CellState
    velocity: Vector2
    last_growth_timestamp: float
    min_time_between_growths: float
    children_remaining: int

    @property
    def position(self) -> Vector2:
        return self.state.position

    @property
    def age(self) -> Age:
        return self.state.age

    def animate(self, now: float) -> None:
        self._advance()
        self._grow_if_possible(now)

    def _advance(self) -> None:
        self.state.position += self.velocity

    def _grow_if_possible(self, now: float) -> None:
        if now - self.last_growth_timestamp >= self.min_time_between_growths:
            self.last_growth_timestamp = now
            self.state.age.grow(1)

    def try_to_infect(self) -> bool:
        """Turn the cell ill unless it is already ill or vaccinated.

        Illness shortens the remaining lifespan by half the current age.
        Returns True when the cell changed from sound to ill.
        """
        state = self.state
        if state.health is Health.ILL:
            return False
        if state.vaccination is Vaccination.VACCINATED:
            return False
        state.health = Health.ILL
        state.age.reduce_death_age(state.age.years // 2)
        return True

    def invert_horizontal_direction(self) -> None:
        self.velocity.x = -self.velocity.x

    def invert_vertical_direction(self) -> None:
        self.velocity.y = -self.velocity.y

    def is_fertile(self, min_age: int, max_age: int) -> bool:
        return (
            self.state.health is not Health.ILL
            and self.children_remaining > 0
            and min_age <= self.state.age.years <= max_age
        )

    def is_close_to(self, other: "Cell", contact_radius: float) -> bool:
        return self.state.position.distance_to(other.state.position) < contact_radius

    def is_within_horizontal_limits(self, min_x: float, max_x: float) -> bool:
        return self.state.is_within_horizontal_limits(min_x, max_x)

    def is_within_vertical_limits(self, min_y: float, max_y: float) -> bool:
        return self.state.is_within_vertical_limits(min_y, max_y)

    def is_dead(self) -> bool:
        return self.state.age.is_time_to_die()

    def is_ill(self) -> bool:
        return self.state.health is Health.ILL

    def is_vaccinated(self) -> bool:
        return self.state.vaccination is Vaccination.VACCINATED

    def deliver_child(self, factory: "CellFactory", now: float) -> "Cell":
        self.children_remaining -= 1
        return factory.make(self.state.position.x, self.state.position.y, Health.SOUND, now)
