"""Editable static catalog and selector configuration."""

from __future__ import annotations

DEFAULT_PRESET_ID = "default_grocery_list_001"

SELECTOR_SEPARATOR_LABEL = "──────────"
SELECTOR_CREATE_LABEL = "+ New preset…"
SELECTOR_EDIT_LABEL = "✎ Rename selected…"
SELECTOR_DELETE_LABEL = "✕ Delete selected…"

SHARE_TITLE_PREFIX = "QuickShare List"
SHARE_FALLBACK_CATEGORY = "Other"

# Raw default grocery list. `increment_step` is optional and defaults to 1.
DEFAULT_GROCERY_DATA: dict[str, object] = {
    "id": DEFAULT_PRESET_ID,
    "name": "Grocery List",
    "categories": [
        {
            "id": "cat_bakery_001",
            "name": "Bakery",
            "color": "#F1E05A",
            "items": [
                {"id": "item_bread_001", "name": "🍞 Bread", "unit": "loaf"},
                {"id": "item_bagels_002", "name": "🥯 Bagels", "unit": "pack"},
                {"id": "item_tortillas_003", "name": "🌮 Tortillas", "unit": "pack"},
            ],
        },
        {
            "id": "cat_dairy_002",
            "name": "Dairy & Eggs",
            "color": "#60A5FA",
            "items": [
                {"id": "item_milk_004", "name": "🥛 Milk", "unit": "liter", "increment_step": 0.5},
                {"id": "item_cheese_005", "name": "🧀 Cheese", "unit": "g", "increment_step": 100},
                {"id": "item_eggs_006", "name": "🥚 Eggs", "unit": "pcs", "increment_step": 6},
                {"id": "item_yogurt_007", "name": "🍦 Yogurt", "unit": "pot"},
                {"id": "item_butter_008", "name": "🧈 Butter", "unit": "pack"},
            ],
        },
        {
            "id": "cat_fruits_003",
            "name": "Fruits",
            "color": "#F97316",
            "items": [
                {"id": "item_apples_009", "name": "🍎 Apples", "unit": "pcs"},
                {"id": "item_bananas_010", "name": "🍌 Bananas", "unit": "pcs"},
                {"id": "item_berries_011", "name": "🍓 Berries", "unit": "box"},
                {"id": "item_oranges_012", "name": "🍊 Oranges", "unit": "pcs"},
            ],
        },
        {
            "id": "cat_veg_004",
            "name": "Vegetables",
            "color": "#22C55E",
            "items": [
                {"id": "item_lettuce_013", "name": "🥬 Lettuce", "unit": "head"},
                {"id": "item_tomatoes_014", "name": "🍅 Tomatoes", "unit": "kg", "increment_step": 0.5},
                {"id": "item_onions_015", "name": "🧅 Onions", "unit": "kg", "increment_step": 0.5},
                {"id": "item_potatoes_016", "name": "🥔 Potatoes", "unit": "kg", "increment_step": 0.5},
                {"id": "item_carrots_017", "name": "🥕 Carrots", "unit": "kg", "increment_step": 0.25},
                {"id": "item_broccoli_018", "name": "🥦 Broccoli", "unit": "head"},
            ],
        },
        {
            "id": "cat_meat_005",
            "name": "Meat & Poultry",
            "color": "#EF4444",
            "items": [
                {"id": "item_chicken_019", "name": "🍗 Chicken Breast", "unit": "kg", "increment_step": 0.5},
                {"id": "item_beef_020", "name": "🥩 Beef Mince", "unit": "kg", "increment_step": 0.5},
                {"id": "item_sausages_021", "name": "🌭 Sausages", "unit": "pack"},
                {"id": "item_fish_022", "name": "🐟 Fish Fillet", "unit": "kg", "increment_step": 0.25},
            ],
        },
        {
            "id": "cat_pantry_006",
            "name": "Pantry Staples",
            "color": "#A1A1AA",
            "items": [
                {"id": "item_pasta_023", "name": "🍝 Pasta", "unit": "pack"},
                {"id": "item_rice_024", "name": "🍚 Rice", "unit": "kg"},
                {"id": "item_cereal_025", "name": "🥣 Cereal", "unit": "box"},
                {"id": "item_oil_026", "name": "🍾 Cooking Oil", "unit": "bottle"},
                {"id": "item_flour_027", "name": "🌾 Flour", "unit": "kg"},
                {"id": "item_sugar_028", "name": "🧂 Sugar", "unit": "kg"},
                {"id": "item_coffee_029", "name": "☕ Coffee", "unit": "pack"},
            ],
        },
        {
            "id": "cat_frozen_007",
            "name": "Frozen Foods",
            "color": "#22D3EE",
            "items": [
                {"id": "item_frozveg_030", "name": "🥕 Frozen Vegetables", "unit": "bag"},
                {"id": "item_icecream_031", "name": "🍨 Ice Cream", "unit": "tub"},
                {"id": "item_pizza_032", "name": "🍕 Frozen Pizza", "unit": "pcs"},
            ],
        },
        {
            "id": "cat_beverages_008",
            "name": "Beverages",
            "color": "#818CF8",
            "items": [
                {"id": "item_water_033", "name": "💧 Water Bottles", "unit": "pack"},
                {"id": "item_juice_034", "name": "🧃 Juice", "unit": "carton"},
                {"id": "item_soda_035", "name": "🥤 Soda", "unit": "can"},
            ],
        },
    ],
}
