"""Static food and exercise reference tables."""

from dataclasses import dataclass

from diet_tracker.domain.logs import WorkoutCategory


@dataclass(frozen=True)
class FoodItem:
    """Catalog food with per-portion macros."""

    name: str
    calories: int
    carbs_g: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0


@dataclass(frozen=True)
class ExerciseItem:
    """Catalog exercise with calories burned per session."""

    name: str
    calories: int
    category: WorkoutCategory = WorkoutCategory.CARDIO


FOOD_CATALOG: tuple[FoodItem, ...] = (
    FoodItem("Steamed rice (1 bowl)", 300, carbs_g=65, protein_g=5, fat_g=1),
    FoodItem("Boiled egg", 78, carbs_g=1, protein_g=6, fat_g=5),
    FoodItem("Chicken breast 100g", 165, carbs_g=0, protein_g=31, fat_g=3.6),
    FoodItem("Banana", 89, carbs_g=23, protein_g=1, fat_g=0.3),
    FoodItem("Tofu 100g", 76, carbs_g=2, protein_g=8, fat_g=4),
    FoodItem("Green salad", 50, carbs_g=8, protein_g=2, fat_g=1),
    FoodItem("Instant ramen", 500, carbs_g=75, protein_g=10, fat_g=17),
    FoodItem("Gimbap (1 roll)", 340, carbs_g=60, protein_g=10, fat_g=7),
    FoodItem("Oatmeal 100g", 389, carbs_g=66, protein_g=17, fat_g=7),
    FoodItem("Greek yogurt", 100, carbs_g=6, protein_g=10, fat_g=3),
    FoodItem("Milk 200ml", 130, carbs_g=10, protein_g=7, fat_g=7),
    FoodItem("Americano", 10, carbs_g=2, protein_g=0, fat_g=0),
    FoodItem("Apple", 72, carbs_g=19, protein_g=0.4, fat_g=0.2),
    FoodItem("Sweet potato 100g", 86, carbs_g=20, protein_g=1.6, fat_g=0.1),
)

EXERCISE_CATALOG: tuple[ExerciseItem, ...] = (
    ExerciseItem("Walking 30 min", 150, WorkoutCategory.CARDIO),
    ExerciseItem("Jogging 30 min", 300, WorkoutCategory.CARDIO),
    ExerciseItem("Running 30 min", 400, WorkoutCategory.CARDIO),
    ExerciseItem("Cycling 30 min", 250, WorkoutCategory.CARDIO),
    ExerciseItem("Swimming 30 min", 350, WorkoutCategory.CARDIO),
    ExerciseItem("Squats 3 sets", 100, WorkoutCategory.STRENGTH),
    ExerciseItem("Push-ups 3 sets", 80, WorkoutCategory.STRENGTH),
    ExerciseItem("Plank 3 sets", 50, WorkoutCategory.STRENGTH),
    ExerciseItem("Weight training 1 hour", 300, WorkoutCategory.STRENGTH),
    ExerciseItem("Yoga 1 hour", 200, WorkoutCategory.FLEXIBILITY),
    ExerciseItem("HIIT 20 min", 300, WorkoutCategory.CARDIO),
    ExerciseItem("Pilates 1 hour", 250, WorkoutCategory.FLEXIBILITY),
)
