"""
Static fallback data served when an external API is unavailable.

Every user-facing flow must show *something*: a plausible recipe, a sample
video or a randomized dish guess.
"""

from __future__ import annotations

import random
from typing import List, Optional

from recipelens.models.analysis import DishAnalysis
from recipelens.models.recipe import Ingredient, Recipe, Step

FALLBACK_NOTE = "Using fallback recipe due to API error"

MOCK_DISHES = [
    "Chocolate Cake",
    "Pasta Carbonara",
    "Chicken Tikka Masala",
    "Vegetable Stir Fry",
    "Beef Burger",
    "Caesar Salad",
    "Mushroom Risotto",
    "Sushi Roll",
]

DEFAULT_FIND_STEPS = [
    "Combine all ingredients according to your preference.",
    "Cook until done to your liking.",
    "Serve and enjoy your meal!",
]


def fallback_recipe(dish_name: Optional[str], cuisine: Optional[str] = None) -> Recipe:
    """Generic recipe built around the requested dish name."""
    if not dish_name:
        return simple_recipe()

    return Recipe(
        name=dish_name,
        description=f"A delicious {dish_name} recipe prepared with fresh ingredients.",
        cuisine=cuisine or "International",
        difficulty="Medium",
        cookingTime=30,
        servings=4,
        ingredients=_generic_ingredients(),
        steps=[
            Step(instruction="Prepare all ingredients."),
            Step(instruction="Heat olive oil in a pan over medium heat. Add onions and cook until translucent."),
            Step(instruction="Add garlic and cook for another minute until fragrant."),
            Step(
                instruction="Add the main ingredient and cook according to its type.",
                tip="Cooking times vary depending on the ingredient.",
            ),
            Step(instruction="Season with salt and pepper to taste."),
            Step(instruction="Serve hot and enjoy your meal!"),
        ],
    )


def simple_recipe() -> Recipe:
    """Last-resort recipe when not even a dish name is known."""
    return Recipe(
        name="Simple Dish",
        description="A simple and delicious meal.",
        cuisine="International",
        difficulty="Easy",
        cookingTime=20,
        servings=2,
        ingredients=[
            Ingredient(name="ingredient 1", amount="as needed"),
            Ingredient(name="ingredient 2", amount="as needed"),
        ],
        steps=[Step(instruction="Combine all ingredients and cook until done.")],
    )


def mock_dish_analysis(rng: Optional[random.Random] = None) -> DishAnalysis:
    """Random dish guess with three distinct alternatives and confidence in [0.70, 0.95)."""
    rng = rng or random.Random()
    picks = rng.sample(MOCK_DISHES, 4)
    return DishAnalysis(
        dishName=picks[0],
        cuisine="International",
        confidence=0.7 + rng.random() * 0.25,
        alternatives=picks[1:],
        fallback=True,
    )


def local_mock_recipe(dish_name: str, cuisine: Optional[str] = None) -> Recipe:
    """Offline recipe for the client layer, picked by keywords in the dish name."""
    if "Pasta" in dish_name or "Carbonara" in dish_name:
        return _carbonara(cuisine)
    if "Cake" in dish_name or "Chocolate" in dish_name:
        return _chocolate_cake()
    if "Chicken" in dish_name or "Tikka" in dish_name:
        return _tikka_masala()

    return Recipe(
        name=dish_name,
        description=f"A delicious {dish_name.lower()} prepared with fresh ingredients.",
        cuisine=cuisine or "International",
        difficulty="Medium",
        cookingTime=30,
        servings=4,
        ingredients=_generic_ingredients(),
        steps=[
            Step(instruction="Prepare all ingredients as specified in the ingredients list."),
            Step(instruction="Heat olive oil in a pan over medium heat. Add onions and cook until translucent."),
            Step(instruction="Add garlic and cook for another minute until fragrant."),
            Step(
                instruction="Add the main ingredient and cook according to its type.",
                tip="Cooking times vary depending on the ingredient. Make sure it's cooked through properly.",
            ),
            Step(instruction="Season with salt and pepper to taste."),
            Step(instruction="Serve hot and enjoy your meal!"),
        ],
    )


def _generic_ingredients() -> List[Ingredient]:
    return [
        Ingredient(name="main ingredient", amount="500g"),
        Ingredient(name="olive oil", amount="2 tbsp"),
        Ingredient(name="garlic", amount="2 cloves", notes="Minced"),
        Ingredient(name="onion", amount="1 medium", notes="Diced"),
        Ingredient(name="salt and pepper", amount="to taste"),
    ]


def _carbonara(cuisine: Optional[str]) -> Recipe:
    return Recipe(
        name="Creamy Pasta Carbonara",
        description="A rich and creamy Italian pasta dish with pancetta, eggs, and Parmesan cheese.",
        cuisine=cuisine or "Italian",
        difficulty="Medium",
        cookingTime=25,
        servings=4,
        ingredients=[
            Ingredient(name="spaghetti", amount="400g"),
            Ingredient(name="pancetta or guanciale", amount="150g", notes="Diced into small cubes"),
            Ingredient(name="egg yolks", amount="6"),
            Ingredient(name="Parmesan cheese", amount="50g", notes="Freshly grated, plus extra for serving"),
            Ingredient(name="black pepper", amount="1 tsp", notes="Freshly ground"),
            Ingredient(name="salt", amount="to taste"),
            Ingredient(name="garlic", amount="2 cloves", notes="Minced (optional)"),
        ],
        steps=[
            Step(instruction="Bring a large pot of salted water to a boil and cook the spaghetti according to package instructions until al dente."),
            Step(
                instruction="While the pasta is cooking, heat a large skillet over medium heat. Add the pancetta and cook until crispy, about 5-7 minutes.",
                tip="The fat rendered from the pancetta will be used to coat the pasta, so don't drain it.",
            ),
            Step(instruction="If using garlic, add it to the pancetta and cook for about 30 seconds until fragrant. Remove from heat."),
            Step(instruction="In a bowl, whisk together the egg yolks, grated Parmesan, and a generous amount of black pepper."),
            Step(instruction="When the pasta is done, reserve about 1/2 cup of the pasta water, then drain the pasta."),
            Step(
                instruction="Working quickly, add the hot pasta to the skillet with the pancetta. Toss to coat the pasta in the rendered fat.",
                tip="The pasta needs to be hot to partially cook the egg mixture without scrambling it.",
            ),
            Step(instruction="Remove the skillet from the heat completely and pour in the egg and cheese mixture, tossing constantly to create a creamy sauce. Add a splash of the reserved pasta water if needed to loosen the sauce."),
            Step(instruction="Serve immediately with extra grated Parmesan and freshly ground black pepper."),
        ],
    )


def _chocolate_cake() -> Recipe:
    return Recipe(
        name="Decadent Chocolate Cake",
        description="A rich, moist chocolate cake with a silky ganache frosting.",
        cuisine="Dessert",
        difficulty="Medium",
        cookingTime=60,
        servings=8,
        ingredients=[
            Ingredient(name="all-purpose flour", amount="2 cups"),
            Ingredient(name="granulated sugar", amount="2 cups"),
            Ingredient(name="unsweetened cocoa powder", amount="3/4 cup"),
            Ingredient(name="baking powder", amount="2 tsp"),
            Ingredient(name="baking soda", amount="1 1/2 tsp"),
            Ingredient(name="salt", amount="1 tsp"),
            Ingredient(name="eggs", amount="2 large"),
            Ingredient(name="milk", amount="1 cup"),
            Ingredient(name="vegetable oil", amount="1/2 cup"),
            Ingredient(name="vanilla extract", amount="2 tsp"),
            Ingredient(name="boiling water", amount="1 cup"),
            Ingredient(name="heavy cream", amount="1 cup", notes="For ganache"),
            Ingredient(name="semi-sweet chocolate chips", amount="1 1/2 cups", notes="For ganache"),
        ],
        steps=[
            Step(instruction="Preheat oven to 350°F (175°C). Grease and flour two 9-inch round cake pans."),
            Step(instruction="In a large bowl, whisk together flour, sugar, cocoa powder, baking powder, baking soda, and salt."),
            Step(
                instruction="Add eggs, milk, oil, and vanilla to the dry ingredients and mix with an electric mixer on medium speed for about 2 minutes.",
                tip="The batter will be quite thick at this stage.",
            ),
            Step(instruction="Stir in boiling water. The batter will become thin, which is normal."),
            Step(instruction="Pour batter evenly into the prepared pans and bake for 30-35 minutes, or until a toothpick inserted in the center comes out clean."),
            Step(instruction="Allow cakes to cool in the pans for 10 minutes, then remove from pans and cool completely on wire racks."),
            Step(instruction="For the ganache, heat heavy cream until it just begins to simmer (don't let it boil). Pour over chocolate chips in a bowl and let sit for 5 minutes, then stir until smooth."),
            Step(instruction="Once the cakes are completely cool, spread ganache over one layer, stack the second layer on top, and cover the entire cake with the remaining ganache."),
        ],
    )


def _tikka_masala() -> Recipe:
    return Recipe(
        name="Authentic Chicken Tikka Masala",
        description="Tender pieces of chicken in a rich, spiced tomato cream sauce.",
        cuisine="Indian",
        difficulty="Medium",
        cookingTime=45,
        servings=4,
        ingredients=[
            Ingredient(name="boneless chicken breasts", amount="800g", notes="Cut into bite-sized pieces"),
            Ingredient(name="plain yogurt", amount="1 cup", notes="For marinade"),
            Ingredient(name="lemon juice", amount="2 tbsp", notes="For marinade"),
            Ingredient(name="ginger", amount="1 tbsp", notes="Grated, for marinade"),
            Ingredient(name="garlic", amount="3 cloves", notes="Minced, for marinade"),
            Ingredient(name="garam masala", amount="2 tsp", notes="For marinade"),
            Ingredient(name="ground cumin", amount="1 tsp", notes="For marinade"),
            Ingredient(name="ground turmeric", amount="1/2 tsp", notes="For marinade"),
            Ingredient(name="vegetable oil", amount="2 tbsp"),
            Ingredient(name="onion", amount="1 large", notes="Finely diced"),
            Ingredient(name="garlic", amount="3 cloves", notes="Minced, for sauce"),
            Ingredient(name="ginger", amount="1 tbsp", notes="Grated, for sauce"),
            Ingredient(name="ground coriander", amount="1 tsp"),
            Ingredient(name="ground cumin", amount="1 tsp"),
            Ingredient(name="paprika", amount="1 tsp"),
            Ingredient(name="garam masala", amount="1 tsp"),
            Ingredient(name="crushed tomatoes", amount="400g can"),
            Ingredient(name="tomato paste", amount="2 tbsp"),
            Ingredient(name="heavy cream", amount="1 cup"),
            Ingredient(name="salt", amount="to taste"),
            Ingredient(name="fresh cilantro", amount="handful", notes="Chopped, for garnish"),
        ],
        steps=[
            Step(
                instruction="In a bowl, mix yogurt, lemon juice, ginger, garlic, garam masala, cumin, and turmeric. Add chicken and marinate for at least 1 hour, preferably overnight in the refrigerator.",
                tip="The longer you marinate, the more flavorful the chicken will be.",
            ),
            Step(instruction="Preheat oven to 450°F (230°C). Thread chicken onto skewers and place on a baking sheet. Bake for 15 minutes, or until the chicken is cooked through."),
            Step(instruction="Meanwhile, heat oil in a large pan over medium heat. Add onion and cook until softened, about 5 minutes."),
            Step(instruction="Add garlic and ginger to the pan and cook for 1 minute. Add ground coriander, cumin, paprika, and garam masala. Cook for another minute to toast the spices."),
            Step(instruction="Add crushed tomatoes and tomato paste. Simmer for 15 minutes, stirring occasionally."),
            Step(instruction="Stir in heavy cream and simmer until the sauce thickens, about 5 minutes."),
            Step(
                instruction="Add the baked chicken pieces to the sauce and simmer for 5 more minutes.",
                tip="If the sauce is too thick, add a little water or chicken stock to reach your desired consistency.",
            ),
            Step(instruction="Season with salt to taste. Garnish with fresh chopped cilantro and serve with naan bread or rice."),
        ],
    )
