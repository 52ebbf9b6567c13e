"""Lookup and search over the food and exercise reference tables."""

from dataclasses import dataclass

from diet_tracker.domain.catalog import (
    EXERCISE_CATALOG,
    FOOD_CATALOG,
    ExerciseItem,
    FoodItem,
)


@dataclass
class CatalogService:
    """Read-only access to the reference tables."""

    foods: tuple[FoodItem, ...] = FOOD_CATALOG
    exercises: tuple[ExerciseItem, ...] = EXERCISE_CATALOG

    def search_foods(self, query: str | None) -> list[FoodItem]:
        """Return foods whose name contains the query, or all foods when empty."""
        needle = (query or "").strip().lower()
        if not needle:
            return list(self.foods)
        return [food for food in self.foods if needle in food.name.lower()]

    def search_exercises(self, query: str | None) -> list[ExerciseItem]:
        """Return exercises matching the query by name or category."""
        needle = (query or "").strip().lower()
        if not needle:
            return list(self.exercises)
        return [
            exercise
            for exercise in self.exercises
            if needle in exercise.name.lower() or needle in exercise.category.value
        ]

    def get_food(self, name: str) -> FoodItem | None:
        """Return the food with an exact name, if present."""
        return next((food for food in self.foods if food.name == name), None)

    def get_exercise(self, name: str) -> ExerciseItem | None:
        """Return the exercise with an exact name, if present."""
        return next(
            (exercise for exercise in self.exercises if exercise.name == name), None
        )
