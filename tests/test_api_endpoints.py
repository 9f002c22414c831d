"""Tests for the JSON API."""

from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.logs import ExerciseType, FoodItem
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.shop import Product
from tests.conftest import FakeRecipeGenerator

DAY = "2024-05-01"
MORNING = "2024-05-01T08:30:00+00:00"


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_user_lifecycle(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    created = client.post("/api/users", json={"name": "Alex"})
    user_id = created.json()["id"]
    goals = client.put(
        f"/api/user/{user_id}/goals",
        json={"calories": 1800, "protein": 150, "carbs": 160, "fat": 60},
    )
    profile = client.put(
        f"/api/user/{user_id}/profile",
        json={
            "weight": 154,
            "weightUnit": "lb",
            "height": 70,
            "heightUnit": "in",
            "age": 30,
            "sex": "male",
            "activityLevel": "moderate",
            "goal": "muscleGain",
        },
    )

    assert created.status_code == 201
    assert created.json()["dailyCalorieGoal"] == 2000
    assert created.json()["points"] == 0
    assert goals.json()["dailyProteinGoal"] == 150
    assert profile.status_code == 200
    assert profile.json()["fitnessGoal"] == "muscleGain"
    assert profile.json()["profile"]["weightKg"] > 69
    assert client.get("/api/user/999").status_code == 404


def test_targets_calculator(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/targets",
        json={
            "weight": 70,
            "height": 175,
            "age": 30,
            "sex": "male",
            "activityLevel": "moderate",
            "goal": "maintenance",
        },
    )
    invalid = client.post(
        "/api/targets",
        json={
            "weight": 70,
            "height": 175,
            "age": 30,
            "sex": "male",
            "activityLevel": "extreme",
            "goal": "maintenance",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "bmr": 1649,
        "tdee": 2556,
        "calories": 2556,
        "protein": 192,
        "carbs": 288,
        "fat": 71,
    }
    assert invalid.status_code == 400
    assert "activity level" in invalid.json()["message"]


def test_non_finite_numbers_are_rejected(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    headers = {"Content-Type": "application/json"}

    targets = client.post(
        "/api/targets",
        content=(
            '{"weight": NaN, "height": 175, "age": 30, "sex": "male", '
            '"activityLevel": "moderate", "goal": "maintenance"}'
        ),
        headers=headers,
    )
    food = client.post(
        "/api/foods",
        content=(
            '{"name": "Rice", "calories": NaN, "protein": 1, "carbs": 1, '
            '"fat": 1, "servingSize": Infinity, "servingUnit": "g"}'
        ),
        headers=headers,
    )

    assert targets.status_code == 422
    assert food.status_code == 422
    assert client.get("/api/foods").json() == []


def test_food_contribution_awards_points(
    container: AppContainer, user: UserRecord
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/foods",
        json={
            "name": "Greek Yogurt",
            "calories": 100,
            "protein": 17,
            "carbs": 6,
            "fat": 0.7,
            "servingSize": 170,
            "servingUnit": "g",
            "addedByUserId": user.id,
        },
    )

    assert response.status_code == 201
    assert response.json()["addedByUserId"] == user.id
    assert client.get(f"/api/user/{user.id}").json()["points"] == 10
    assert [food["name"] for food in client.get("/api/foods/search?q=yog").json()] == [
        "Greek Yogurt"
    ]


def test_food_log_progress_and_delete(
    container: AppContainer, user: UserRecord, toast: FoodItem
) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/api/food-logs",
        json={
            "userId": user.id,
            "foodId": toast.id,
            "quantity": 2,
            "mealType": "breakfast",
            "loggedAt": MORNING,
        },
    )
    listed = client.get(f"/api/food-logs/{user.id}", params={"date": DAY})
    meal = client.get(
        f"/api/progress/{user.id}/meals/breakfast", params={"date": DAY}
    )
    progress = client.get(f"/api/progress/{user.id}", params={"date": DAY})

    assert created.status_code == 201
    assert listed.json()[0]["food"]["name"] == "Whole Grain Toast"
    assert meal.json() == {"calories": 180, "protein": 6, "carbs": 32, "fat": 2}
    assert progress.json()["remaining"]["calories"] == 1820

    log_id = created.json()["id"]
    assert client.delete(f"/api/food-logs/{log_id}").status_code == 204
    assert client.delete(f"/api/food-logs/{log_id}").status_code == 404


def test_food_log_validation_errors(
    container: AppContainer, user: UserRecord, toast: FoodItem
) -> None:
    client = TestClient(create_app(container))

    bad_quantity = client.post(
        "/api/food-logs",
        json={"userId": user.id, "foodId": toast.id, "quantity": 0, "mealType": "lunch"},
    )
    missing_food = client.post(
        "/api/food-logs",
        json={"userId": user.id, "foodId": 999, "quantity": 1, "mealType": "lunch"},
    )
    malformed = client.post("/api/food-logs", json={"userId": user.id})

    assert bad_quantity.status_code == 400
    assert "message" in bad_quantity.json()
    assert missing_food.status_code == 404
    assert malformed.status_code == 422


def test_exercise_and_water_logs(
    container: AppContainer, user: UserRecord, running: ExerciseType
) -> None:
    client = TestClient(create_app(container))

    client.post(
        "/api/exercise-logs",
        json={
            "userId": user.id,
            "exerciseId": running.id,
            "duration": 25,
            "loggedAt": MORNING,
        },
    )
    client.post(
        "/api/water-intake",
        json={"userId": user.id, "amount": 250, "loggedAt": MORNING},
    )
    client.post(
        "/api/water-intake",
        json={"userId": user.id, "amount": 500, "loggedAt": MORNING},
    )

    exercises = client.get(f"/api/exercise-logs/{user.id}", params={"date": DAY})
    total = client.get(f"/api/water-intake/{user.id}/total", params={"date": DAY})

    assert exercises.json()[0]["caloriesBurned"] == 285
    assert exercises.json()[0]["exercise"]["name"] == "Running"
    assert total.json() == {"total": 750}


def test_recipe_generation_endpoint(
    container: AppContainer, recipe_generator: FakeRecipeGenerator
) -> None:
    client = TestClient(create_app(container))
    body = {
        "fitnessGoal": "highprotein",
        "remainingNutrition": {"calories": 600, "protein": 50, "carbs": 60, "fat": 20},
    }

    created = client.post("/api/recipes/generate", json=body)
    recipe_generator.error = RuntimeError("boom")
    failed = client.post("/api/recipes/generate", json=body)

    assert created.status_code == 201
    assert created.json()["fitnessGoal"] == "highProtein"
    assert created.json()["imageUrl"]
    assert failed.status_code == 502
    assert failed.json() == {"message": "Failed to generate recipe"}
    assert len(client.get("/api/recipes").json()) == 1


def test_recommended_recipes_endpoint(
    container: AppContainer, user: UserRecord
) -> None:
    client = TestClient(create_app(container))
    for name, calories in (("Big", 1900), ("Right", 2100)):
        client.post(
            "/api/recipes",
            json={
                "name": name,
                "calories": calories,
                "protein": 0,
                "carbs": 0,
                "fat": 0,
                "fitnessGoal": "maintenance",
            },
        )

    response = client.get(f"/api/recipes/recommended/{user.id}", params={"date": DAY})

    assert [recipe["name"] for recipe in response.json()] == ["Big", "Right"]
    assert client.get("/api/recipes/999").status_code == 404


def test_cart_flow(
    container: AppContainer, user: UserRecord, shaker: Product
) -> None:
    client = TestClient(create_app(container))
    container.user_service.award_points(user.id, 100)

    client.post(
        "/api/cart",
        json={"userId": user.id, "productId": shaker.id, "quantity": 1},
    )
    merged = client.post(
        "/api/cart",
        json={
            "userId": user.id,
            "productId": shaker.id,
            "quantity": 1,
            "usePoints": True,
        },
    )
    cart = client.get(f"/api/cart/{user.id}")
    bad = client.put(f"/api/cart/{merged.json()['id']}", json={"quantity": 0})

    assert merged.json()["quantity"] == 2
    assert cart.json()["items"][0]["unitPriceCents"] == 7200
    assert cart.json()["subtotal"] == "144.00"
    assert cart.json()["pointsUsed"] == 200
    assert bad.status_code == 400

    product = client.get(f"/api/products/{shaker.id}").json()
    assert product["price"] == "100.00"
    assert client.get("/api/products", params={"category": "equipment"}).json()

    assert client.delete(f"/api/cart/user/{user.id}").status_code == 204
    assert client.get(f"/api/cart/{user.id}").json()["items"] == []
    assert client.delete(f"/api/cart/{merged.json()['id']}").status_code == 404


def test_checkout_endpoint(
    container: AppContainer, user: UserRecord, shaker: Product
) -> None:
    client = TestClient(create_app(container))
    container.user_service.award_points(user.id, 100)
    client.post(
        "/api/cart",
        json={
            "userId": user.id,
            "productId": shaker.id,
            "quantity": 1,
            "usePoints": True,
        },
    )

    response = client.post(f"/api/cart/user/{user.id}/checkout")
    empty = client.post(f"/api/cart/user/{user.id}/checkout")

    assert response.status_code == 200
    assert response.json()["subtotalCents"] == 7200
    assert client.get(f"/api/user/{user.id}").json()["points"] == 0
    assert empty.status_code == 400


def test_daily_summary_endpoint(
    container: AppContainer, user: UserRecord, toast: FoodItem
) -> None:
    client = TestClient(create_app(container))
    container.ledger.log_food(user.id, toast.id, 2, "breakfast")

    response = client.get(f"/api/progress/{user.id}/summary")

    data = response.json()
    assert response.status_code == 200
    assert data["meals"]["breakfast"]["calories"] == 180
    assert data["meals"]["dinner"]["calories"] == 0
    assert data["progress"]["remaining"]["calories"] == 1820
    assert data["waterMl"] == 0
