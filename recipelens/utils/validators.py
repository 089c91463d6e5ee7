"""Input validation utilities."""

from typing import Any

from recipelens.utils.exceptions import ValidationError

MAX_INGREDIENTS = 50
MAX_INGREDIENT_LENGTH = 500
MAX_DISH_NAME_LENGTH = 200


def validate_dish_name(dish_name: Any) -> str:
    """
    Validate a dish name submitted for recipe generation.

    Args:
        dish_name: Raw dish name from the request body

    Returns:
        Stripped dish name

    Raises:
        ValidationError: If the dish name is missing or unreasonable
    """
    if not isinstance(dish_name, str) or not dish_name.strip():
        raise ValidationError("No dish name provided")

    dish_name = dish_name.strip()
    if len(dish_name) > MAX_DISH_NAME_LENGTH:
        raise ValidationError(f"Dish name cannot exceed {MAX_DISH_NAME_LENGTH} characters")

    return dish_name


def validate_cuisine(cuisine: Any) -> str | None:
    """Return a stripped cuisine, or None when absent or blank."""
    if cuisine is None:
        return None
    if not isinstance(cuisine, str):
        raise ValidationError("Cuisine must be a string")
    return cuisine.strip() or None


def validate_ingredients_list(ingredients: Any) -> list:
    """
    Validate ingredients list.

    Args:
        ingredients: List of ingredient strings

    Returns:
        Validated list of ingredients

    Raises:
        ValidationError: If ingredients list is invalid
    """
    if not isinstance(ingredients, list) or not ingredients:
        raise ValidationError("No ingredients provided or invalid format")

    if len(ingredients) > MAX_INGREDIENTS:
        raise ValidationError(f"Ingredients list cannot exceed {MAX_INGREDIENTS} items")

    validated = []
    for ingredient in ingredients:
        if not isinstance(ingredient, str):
            raise ValidationError("All ingredients must be strings")
        ingredient = ingredient.strip()
        if not ingredient:
            continue
        if len(ingredient) > MAX_INGREDIENT_LENGTH:
            raise ValidationError(f"Ingredient text cannot exceed {MAX_INGREDIENT_LENGTH} characters")
        validated.append(ingredient)

    if not validated:
        raise ValidationError("No ingredients provided or invalid format")

    return validated


def validate_secret_name(secret_name: Any) -> str:
    """Validate the name passed to /check-secret."""
    if not isinstance(secret_name, str) or not secret_name.strip():
        raise ValidationError("No secret name provided")
    return secret_name.strip().upper()
