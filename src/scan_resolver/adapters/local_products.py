"""Bundled offline product catalog (per-100g values from Open Food Facts)."""

from scan_resolver.domain.products import LocalProduct, NutritionFacts

SEED_PRODUCTS: tuple[LocalProduct, ...] = (
    LocalProduct(
        barcode="5449000000996",
        name="Coca-Cola Classic",
        brand="Coca-Cola",
        ingredients=(
            "Carbonated Water",
            "Sugar",
            "Caramel Color",
            "Phosphoric Acid",
            "Natural Flavors",
            "Caffeine",
        ),
        ingredients_text=(
            "Carbonated water, sugar, caramel color (E150d), phosphoric acid, "
            "natural flavors, caffeine"
        ),
        nutrition=NutritionFacts(42, 0, 0, 10.6, 10.6, 0, 0, 0),
        categories=("Beverages", "Carbonated drinks", "Sodas"),
    ),
    LocalProduct(
        barcode="0003800001532",
        name="Frosted Flakes",
        brand="Kellogg's",
        ingredients=("Milled Corn", "Sugar", "Malt Flavor", "Salt", "BHT"),
        ingredients_text=(
            "Milled corn, sugar, malt flavor, contains 2% or less of salt, "
            "BHT for freshness"
        ),
        nutrition=NutritionFacts(375, 0, 0, 87.5, 37.5, 2.5, 5, 1.25),
        categories=("Breakfast cereals", "Sweetened cereals"),
    ),
    LocalProduct(
        barcode="0007874220778",
        name="Greek Yogurt",
        brand="Chobani",
        ingredients=("Cultured Lowfat Milk", "Live Active Cultures"),
        ingredients_text="Cultured lowfat milk, live and active cultures",
        nutrition=NutritionFacts(59, 0, 0, 3.5, 2.9, 0, 10.6, 0.08),
        allergens=("Milk",),
        categories=("Dairy", "Yogurt", "Greek yogurt"),
    ),
    LocalProduct(
        barcode="0002840005006",
        name="Cheddar Cheese",
        brand="Kraft",
        ingredients=("Milk", "Cheese Culture", "Salt", "Enzymes", "Annatto"),
        ingredients_text=(
            "Cheddar cheese (milk, cheese culture, salt, enzymes, annatto [color])"
        ),
        nutrition=NutritionFacts(403, 33.1, 21, 1.3, 0.5, 0, 24.9, 1.7),
        allergens=("Milk",),
        categories=("Dairy", "Cheese", "Cheddar"),
    ),
    LocalProduct(
        barcode="0001820000012",
        name="White Bread",
        brand="Wonder Bread",
        ingredients=(
            "Enriched Wheat Flour",
            "Water",
            "High Fructose Corn Syrup",
            "Yeast",
            "Soybean Oil",
            "Salt",
        ),
        ingredients_text=(
            "Enriched wheat flour, water, high fructose corn syrup, yeast, "
            "soybean oil, salt"
        ),
        nutrition=NutritionFacts(266, 3.3, 0.6, 49.4, 5, 2.4, 7.6, 1.3),
        allergens=("Wheat", "Soy"),
        categories=("Bread", "White bread"),
    ),
    LocalProduct(
        barcode="0001200000008",
        name="Orange Juice",
        brand="Tropicana",
        ingredients=("Orange Juice",),
        ingredients_text="100% pure squeezed orange juice",
        nutrition=NutritionFacts(45, 0, 0, 10.4, 8.4, 0.2, 0.7, 0),
        labels=("100% juice",),
        categories=("Beverages", "Juices", "Orange juice"),
    ),
    LocalProduct(
        barcode="0007470000001",
        name="Green Tea",
        brand="Lipton",
        ingredients=("Green Tea",),
        ingredients_text="Green tea leaves",
        nutrition=NutritionFacts(1, 0, 0, 0, 0, 0, 0, 0),
        labels=("Vegan", "Paleo"),
        categories=("Beverages", "Tea", "Green tea"),
    ),
    LocalProduct(
        barcode="0002800000014",
        name="Potato Chips",
        brand="Lay's",
        ingredients=("Potatoes", "Vegetable Oil", "Salt"),
        ingredients_text="Potatoes, vegetable oil (sunflower, corn, and/or canola oil), salt",
        nutrition=NutritionFacts(536, 35.7, 3.6, 50, 0.4, 4.3, 6.4, 1.5),
        categories=("Snacks", "Chips", "Potato chips"),
    ),
    LocalProduct(
        barcode="0009300000006",
        name="Dark Chocolate 85%",
        brand="Lindt",
        ingredients=("Cocoa Mass", "Cocoa Butter", "Sugar", "Natural Flavor"),
        ingredients_text="Cocoa mass, cocoa butter, demerara sugar, natural bourbon vanilla",
        nutrition=NutritionFacts(580, 46, 27, 19, 11, 14, 11, 0),
        categories=("Snacks", "Chocolate", "Dark chocolate"),
    ),
)
