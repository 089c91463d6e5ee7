"""Recipe Pydantic models."""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

Difficulty = Literal["Easy", "Medium", "Hard"]


class Ingredient(BaseModel):
    """Single ingredient model."""

    name: str = Field(..., description="Ingredient name")
    amount: str = Field(..., description="Free-text amount (e.g., '400g', '2 tbsp', 'to taste')")
    notes: Optional[str] = Field(None, description="Preparation notes or the original ingredient line")


class Step(BaseModel):
    """Single cooking step."""

    instruction: str = Field(..., description="Instruction text")
    tip: Optional[str] = Field(None, description="Optional tip for this step")


class Recipe(BaseModel):
    """Unified recipe model returned by all endpoints."""

    name: str = Field(..., description="Recipe name")
    description: str = Field("", description="One-sentence description")
    cuisine: str = Field("International", description="Cuisine (e.g., 'Italian')")
    difficulty: Difficulty = Field("Medium", description="Easy, Medium or Hard")
    cookingTime: int = Field(30, ge=0, description="Total cooking time in minutes")
    servings: int = Field(4, ge=0, description="Number of servings")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ordered ingredients")
    steps: List[Step] = Field(default_factory=list, description="Ordered steps")
    imageUrl: Optional[str] = Field(None, description="Recipe image URL")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "name": "Creamy Pasta Carbonara",
                "description": "A rich and creamy Italian pasta dish with pancetta, eggs, and Parmesan cheese.",
                "cuisine": "Italian",
                "difficulty": "Medium",
                "cookingTime": 25,
                "servings": 4,
                "ingredients": [
                    {"name": "spaghetti", "amount": "400g", "notes": None},
                    {"name": "pancetta or guanciale", "amount": "150g", "notes": "Diced into small cubes"},
                ],
                "steps": [
                    {
                        "instruction": "Bring a large pot of salted water to a boil and cook the spaghetti.",
                        "tip": None,
                    },
                ],
                "imageUrl": "https://img.spoonacular.com/recipes/716429-556x370.jpg",
            }
        }


class GenerateRecipeRequest(BaseModel):
    """Request body for /generate-recipe."""

    dishName: Optional[str] = None
    cuisine: Optional[str] = None


class FindRecipesRequest(BaseModel):
    """Request body for /find-recipes-by-ingredients (validated in the route)."""

    ingredients: Any = None


class RecipeResponse(BaseModel):
    """Response for /generate-recipe."""

    success: bool = True
    recipe: Recipe
    note: Optional[str] = None


class RecipeListResponse(BaseModel):
    """Response for /find-recipes-by-ingredients."""

    success: bool
    recipes: List[Recipe] = Field(default_factory=list)
    error: Optional[str] = None
