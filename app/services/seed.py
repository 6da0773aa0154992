# app/services/seed.py

import logging

from sqlalchemy.orm import Session

from app.crud import catalog as crud_catalog
from app.crud import content as crud_content
from app.models.catalog import Brand, Category, SkinConcern, SkinType
from app.utils.text import slugify

logger = logging.getLogger(__name__)


CATEGORIES = [
    {"name": "Serums", "description": "Concentrated treatments for targeted results."},
    {"name": "Moisturizers", "description": "Daily hydration for every skin type."},
    {"name": "Cleansers", "description": "Gentle cleansing without stripping the skin."},
    {"name": "Masks", "description": "Weekly treatments for a deeper clean."},
    {"name": "Night Care", "description": "Overnight repair and renewal."},
    {"name": "Sunscreen", "description": "Broad spectrum everyday protection."},
    {"name": "Toners", "description": "Balance and prep the skin after cleansing."},
    {"name": "Body Care", "description": "Nourishing care from head to toe."},
]

BRANDS = ["Radiant Skin", "Pure Hydration", "Nature's Touch"]

SKIN_TYPES = ["Normal", "Dry", "Oily", "Combination", "Sensitive", "Mature", "All Skin Types"]

SKIN_CONCERNS = [
    "Dullness", "Uneven Tone", "Dryness", "Dehydration", "Congested Pores", "Excess Oil",
    "Dark Spots", "Sensitivity", "Aging", "Fine Lines", "Sun Protection", "Texture",
]

PRODUCTS = [
    {
        "name": "Glow Serum", "price": 45.99, "original_price": 59.99,
        "description": "Brightening serum for a radiant complexion",
        "category": "Serums", "brand": "Radiant Skin", "is_best_seller": True, "is_featured": True,
        "skin_types": ["Normal", "Dry", "Combination"], "skin_concerns": ["Dullness", "Uneven Tone"],
        "size": "30ml",
    },
    {
        "name": "Hydrating Moisturizer", "price": 32.50,
        "description": "24-hour hydration for all skin types",
        "category": "Moisturizers", "brand": "Pure Hydration", "is_new": True,
        "skin_types": ["Dry", "Sensitive"], "skin_concerns": ["Dryness", "Dehydration"],
        "size": "50ml",
    },
    {
        "name": "Charcoal Detox Mask", "price": 28.75,
        "description": "Deep cleansing mask for clear skin",
        "category": "Masks", "brand": "Nature's Touch", "is_best_seller": True, "is_organic": True,
        "skin_types": ["Oily", "Combination"], "skin_concerns": ["Congested Pores", "Excess Oil"],
        "size": "75ml",
    },
    {
        "name": "Vitamin C Booster", "price": 52.99,
        "description": "Antioxidant-rich serum for brightening",
        "category": "Serums", "brand": "Radiant Skin", "is_new": True, "is_featured": True,
        "skin_types": ["Normal", "Dry", "Combination"], "skin_concerns": ["Dullness", "Dark Spots"],
        "size": "30ml",
    },
    {
        "name": "Gentle Cleansing Oil", "price": 34.99,
        "description": "Removes makeup and impurities without stripping skin",
        "category": "Cleansers", "brand": "Pure Hydration",
        "skin_types": ["Dry", "Sensitive"], "skin_concerns": ["Dryness", "Sensitivity"],
        "size": "150ml",
    },
    {
        "name": "Overnight Repair Cream", "price": 65.50,
        "description": "Intensive nighttime treatment for skin renewal",
        "category": "Night Care", "brand": "Nature's Touch", "is_best_seller": True, "is_organic": True,
        "skin_types": ["Normal", "Dry", "Mature"], "skin_concerns": ["Aging", "Dryness", "Fine Lines"],
        "size": "50ml",
    },
    {
        "name": "Mineral Sunscreen SPF 50", "slug": "mineral-sunscreen-spf50", "price": 29.99,
        "description": "Broad spectrum protection with a lightweight feel",
        "category": "Sunscreen", "brand": "Radiant Skin", "is_new": True,
        "skin_types": ["All Skin Types"], "skin_concerns": ["Sun Protection", "Sensitivity"],
        "size": "50ml",
    },
    {
        "name": "Exfoliating Toner", "price": 28.75, "original_price": 35.00,
        "description": "Gentle chemical exfoliation for smoother skin",
        "category": "Toners", "brand": "Pure Hydration",
        "skin_types": ["Oily", "Combination"], "skin_concerns": ["Texture", "Dullness", "Congested Pores"],
        "size": "200ml",
    },
]

REVIEWS = [
    ("glow-serum", 5, "Sarah M.", "Accra", "My skin has never looked brighter."),
    ("glow-serum", 4, "Ama K.", "Kumasi", "Lovely texture, absorbs fast."),
    ("charcoal-detox-mask", 5, "Kofi A.", "Tema", "Pores look so much cleaner."),
    ("overnight-repair-cream", 5, "Efua B.", "Takoradi", "Wake up with soft, plump skin."),
]

TESTIMONIALS = [
    {
        "rating": 5, "customer_name": "Sarah Mensah", "initials": "SM", "location": "Accra",
        "product": "Glow Serum",
        "text": "I've tried countless serums, but this one actually delivers. My dark spots have faded.",
    },
    {
        "rating": 5, "customer_name": "Kwame Asante", "initials": "KA", "location": "Kumasi",
        "product": "Hydrating Moisturizer",
        "text": "Finally a moisturizer that keeps my skin hydrated all day without feeling greasy.",
    },
    {
        "rating": 4, "customer_name": "Abena Owusu", "initials": "AO", "location": "Cape Coast",
        "product": "Charcoal Detox Mask",
        "text": "My weekly ritual now. Skin feels clean and refreshed after every use.",
    },
]

BLOG_POSTS = [
    {
        "title": "Building a Simple Morning Routine",
        "excerpt": "Three steps that cover everything your skin needs before you leave the house.",
        "content": "Cleanse, treat, protect. A serum with vitamin C followed by a broad spectrum sunscreen...",
        "author": "Skincare Team",
        "category": "Routines",
    },
    {
        "title": "Understanding Your Skin Type",
        "excerpt": "Dry, oily, combination or sensitive? How to tell and why it matters.",
        "content": "Your skin type decides which textures and actives will work best for you...",
        "author": "Skincare Team",
        "category": "Education",
    },
]


def seed_catalog(db: Session) -> bool:
    """
    Заполняет пустой магазин справочниками, товарами и контентом.
    Если товары уже есть - ничего не делает. Возвращает True, если данные были добавлены.
    """
    if crud_catalog.count_products(db) > 0:
        logger.info("Catalog already contains products, skipping seed.")
        return False

    logger.info("Seeding catalog with initial data...")
    categories = {
        c["name"]: crud_catalog.create_taxonomy(db, Category, slug=slugify(c["name"]), **c)
        for c in CATEGORIES
    }
    brands = {name: crud_catalog.create_taxonomy(db, Brand, name=name, slug=slugify(name)) for name in BRANDS}
    skin_types = {name: crud_catalog.create_taxonomy(db, SkinType, name=name, slug=slugify(name)) for name in SKIN_TYPES}
    skin_concerns = {
        name: crud_catalog.create_taxonomy(db, SkinConcern, name=name, slug=slugify(name)) for name in SKIN_CONCERNS
    }

    products = {}
    for data in PRODUCTS:
        fields = dict(data)
        category = categories[fields.pop("category")]
        brand = brands[fields.pop("brand")]
        product_skin_types = [skin_types[name] for name in fields.pop("skin_types")]
        product_skin_concerns = [skin_concerns[name] for name in fields.pop("skin_concerns")]
        fields["slug"] = fields.get("slug") or slugify(fields["name"])
        product = crud_catalog.create_product(
            db,
            skin_types=product_skin_types,
            skin_concerns=product_skin_concerns,
            category_id=category.id,
            brand_id=brand.id,
            stock_quantity=50,
            stock_status="in_stock",
            **fields
        )
        products[product.slug] = product

    # Рейтинг товара считается только из реальных отзывов
    for slug, rating, author, location, comment in REVIEWS:
        crud_catalog.create_review(
            db, products[slug], rating=rating, author=author, location=location,
            comment=comment, is_verified=True
        )

    for testimonial in TESTIMONIALS:
        crud_catalog.create_testimonial(db, **testimonial)
    for post in BLOG_POSTS:
        crud_content.create_blog_post(db, slug=slugify(post["title"]), **post)

    logger.info(
        f"Seed complete: {len(categories)} categories, {len(brands)} brands, "
        f"{len(products)} products, {len(REVIEWS)} reviews."
    )
    return True
