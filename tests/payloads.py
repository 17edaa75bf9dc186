"""JSON payloads mirroring the shared domain fixtures."""


def raw(value: float, unit: object) -> dict[str, object]:
    return {"magnitude": {"kind": "raw", "value": value}, "unit": unit}


def cereal_payload() -> dict[str, object]:
    return {
        "name": "Oat Cereal",
        "nutrients": {
            "energy": raw(120, "calorie"),
            "total_carbs": raw(22, "gram"),
            "total_fat": raw(2, "gram"),
            "protein": raw(4, "gram"),
            "sodium": raw(140, "milligram"),
        },
        "size": {
            "total_amount": raw(300, "gram"),
            "num_servings": 10,
            "serving_size": "1 cup",
        },
        "store_entries": [
            {
                "store_name": "Corner Market",
                "cost": {"kind": "collection", "cents": 500, "quantity": 1},
            },
            {
                "store_name": "Bulk Barn",
                "cost": {"kind": "amount", "cents": 400, "amount": raw(300, "gram")},
                "available": False,
            },
        ],
    }


def milk_payload() -> dict[str, object]:
    return {
        "name": "Whole Milk",
        "nutrients": {
            "energy": raw(150, "calorie"),
            "total_fat": raw(8, "gram"),
            "protein": raw(8, "gram"),
            "calcium": raw(300, "milligram"),
        },
        "size": {
            "total_amount": raw(1920, "milliliter"),
            "num_servings": 8,
            "serving_size": "1 cup",
        },
        "store_entries": [
            {
                "store_name": "Dairy Stand",
                "cost": {"kind": "amount", "cents": 359, "amount": raw(0.5, "gallon")},
            }
        ],
    }
