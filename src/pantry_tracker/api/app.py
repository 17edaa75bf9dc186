"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pantry_tracker.api.schemas import (
    ConsumeRequest,
    ConvertRequest,
    CostsRequest,
    LogbookRequest,
    ParseRequest,
    QuantityModel,
    RecipeRequest,
    ScaleRequest,
    TableRequest,
    inventory_amount_from_domain,
    nutrients_from_domain,
    nutrients_to_domain,
    unit_to_domain,
)
from pantry_tracker.app_logging import configure_logging
from pantry_tracker.containers import AppContainer
from pantry_tracker.domain.inventory import InventoryError, SingleAmount
from pantry_tracker.domain.quantity import parse_quantity
from pantry_tracker.domain.units import UnitError
from pantry_tracker.services.nutrition import (
    NutrientRow,
    TargetProgress,
    consumption_scale,
    scale_nutrients,
)

_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(UnitError)
    async def unit_error_handler(request: Request, exc: UnitError) -> JSONResponse:
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=_UNPROCESSABLE, content={"detail": str(exc)})

    @app.exception_handler(ZeroDivisionError)
    async def zero_division_handler(
        request: Request, exc: ZeroDivisionError
    ) -> JSONResponse:
        logger.info("Rejected %s: zero-sized amount", request.url.path)
        return JSONResponse(
            status_code=_UNPROCESSABLE, content={"detail": "Amount must be non-zero"}
        )

    @app.exception_handler(OverflowError)
    async def overflow_handler(request: Request, exc: OverflowError) -> JSONResponse:
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=_UNPROCESSABLE, content={"detail": str(exc)})

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(
        request: Request, exc: InventoryError
    ) -> JSONResponse:
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=_UNPROCESSABLE, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/quantities/convert")
    async def convert_quantity(payload: ConvertRequest) -> dict[str, object]:
        """Convert a quantity to a unit of the same family."""
        quantity = payload.quantity.to_domain()
        converted = quantity.convert(unit_to_domain(payload.target))
        return {
            "quantity": QuantityModel.from_domain(converted).model_dump(mode="json"),
            "display": converted.format(container.settings.display_max_digits),
        }

    @app.post("/quantities/parse")
    async def parse_quantity_text(payload: ParseRequest) -> dict[str, object]:
        """Parse free text into a quantity; unparsable text yields null."""
        quantity = parse_quantity(payload.text)
        if quantity is None:
            return {"quantity": None, "display": None}
        digits = payload.max_digits
        if digits is None:
            digits = container.settings.display_max_digits
        return {
            "quantity": QuantityModel.from_domain(quantity).model_dump(mode="json"),
            "display": quantity.format(digits),
        }

    @app.post("/nutrients/scale")
    async def scale_food_nutrients(
        payload: ScaleRequest, request: Request
    ) -> dict[str, object]:
        """Nutrients of a food for a consumed amount."""
        state_container: AppContainer = request.app.state.container
        food = payload.food.to_domain()
        scale = consumption_scale(food, payload.amount.to_domain())
        nutrients = scale_nutrients(food.nutrients, scale)
        macros = state_container.nutrition_service.macro_breakdown(nutrients)
        return {
            "scale": scale,
            "nutrients": nutrients_from_domain(nutrients),
            "macros": [asdict(share) for share in macros],
        }

    @app.post("/nutrients/table")
    async def nutrient_table(
        payload: TableRequest, request: Request
    ) -> dict[str, object]:
        """Formatted nutrition facts table and macro calories."""
        state_container: AppContainer = request.app.state.container
        service = state_container.nutrition_service
        nutrients = nutrients_to_domain(payload.nutrients)
        rows = service.nutrient_table(nutrients, payload.scale, payload.max_digits)
        macros = service.macro_breakdown(nutrients, payload.scale)
        return {
            "rows": [_format_row(row) for row in rows],
            "macros": [asdict(share) for share in macros],
        }

    @app.post("/logbook/nutrients")
    async def logbook_nutrients(
        payload: LogbookRequest, request: Request
    ) -> dict[str, object]:
        """Aggregated nutrients of a logbook day."""
        state_container: AppContainer = request.app.state.container
        service = state_container.nutrition_service
        day = payload.to_domain()
        nutrients = service.day_nutrients(day, payload.meal_type)
        return {
            "day": day.day.isoformat(),
            "meal_type": payload.meal_type.value if payload.meal_type else None,
            "nutrients": nutrients_from_domain(nutrients),
            "progress": [
                _format_progress(item) for item in service.target_progress(day)
            ],
        }

    @app.post("/foods/costs")
    async def food_costs(payload: CostsRequest, request: Request) -> dict[str, object]:
        """Cost metrics of a food item for each store."""
        state_container: AppContainer = request.app.state.container
        service = state_container.pricing_service
        food = payload.food.to_domain()
        cheapest = service.cheapest(food)
        return {
            "stores": [asdict(summary) for summary in service.summary(food)],
            "cheapest": cheapest.store_name if cheapest else None,
        }

    @app.post("/recipes/nutrients")
    async def recipe_nutrients(
        payload: RecipeRequest, request: Request
    ) -> dict[str, object]:
        """Per-serving nutrients of a recipe computed from its ingredients."""
        state_container: AppContainer = request.app.state.container
        service = state_container.nutrition_service
        recipe = payload.recipe.to_domain()
        return {
            "nutrients": nutrients_from_domain(service.recipe_nutrients(recipe)),
            "ingredients": [
                {"name": ingredient.name, "scale": service.ingredient_scale(ingredient)}
                for ingredient in recipe.ingredients
            ],
            "total_time": recipe.metadata.total_time,
        }

    @app.post("/inventory/consume")
    async def consume_inventory(payload: ConsumeRequest) -> dict[str, object]:
        """Take a used amount out of what is left of a pantry item."""
        amount = payload.amount.to_domain()
        used = payload.used
        if isinstance(amount, SingleAmount):
            if not isinstance(used, QuantityModel):
                raise InventoryError("Amount-tracked items need a quantity")
            left = amount.consume(used.to_domain())
        else:
            if isinstance(used, QuantityModel):
                raise InventoryError("Packaged items are used by item count")
            left = amount.consume(used)
        return {
            "amount": inventory_amount_from_domain(left).model_dump(mode="json"),
            "fraction_remaining": left.fraction_remaining,
            "is_empty": left.is_empty,
        }

    return app


def _format_row(row: NutrientRow) -> dict[str, object]:
    return {
        "nutrient": row.nutrient.value,
        "label": row.label,
        "amount": row.amount,
        "unit": row.unit,
        "indented": row.indented,
    }


def _format_progress(progress: TargetProgress) -> dict[str, object]:
    return {
        "nutrient": progress.nutrient.value,
        "consumed": progress.consumed,
        "target": progress.target,
        "unit": progress.unit,
        "ratio": progress.ratio,
    }
