# seed_data.py
import sys

from sqlmodel import Session, select

from app.database import create_db_and_tables, engine
from app.models.approved_email import ApprovedEmail
from app.models.product import Product, ProductVariant

APPROVED_EMAILS = [
    ("admin@example.com", "admin"),
    ("rider1@example.com", "rider"),
    ("rider2@example.com", "rider"),
    ("customer@example.com", "customer"),
]

PRODUCTS = [
    {
        "name": "Breeze Ceiling Fan",
        "description": "Energy efficient 3-blade ceiling fan with remote control.",
        "category": "fan",
        "brand": "Zephyr",
        "images": ["https://images.example.com/fans/breeze.jpg"],
        "features": ["BLDC motor", "Remote control", "5 speed settings"],
        "specifications": {"Sweep": "1200 mm", "Power": "28 W"},
        "variants": [
            ("White", "#FFFFFF", "1200mm", 89.0, 25, "ZEP-BRZ-WH-1200"),
            ("Walnut", "#5D432C", "1200mm", 99.0, 10, "ZEP-BRZ-WN-1200"),
        ],
    },
    {
        "name": "ArcticCool Split AC",
        "description": "Inverter split air-conditioner with 4-way swing.",
        "category": "air-conditioner",
        "brand": "Polaris",
        "images": ["https://images.example.com/ac/arcticcool.jpg"],
        "features": ["Inverter compressor", "Wi-Fi control"],
        "specifications": {"Capacity": "1.5 Ton", "Rating": "5 Star"},
        "variants": [
            ("White", "#FFFFFF", "1.5 Ton", 549.0, 8, "POL-ARC-WH-15"),
            ("White", "#FFFFFF", "2 Ton", 649.0, 5, "POL-ARC-WH-20"),
        ],
    },
]


def seed(session: Session):
    for email, role in APPROVED_EMAILS:
        existing = session.exec(select(ApprovedEmail).where(ApprovedEmail.email == email)).first()
        if existing:
            print(f"Email {email} already approved, skipping")
            continue
        session.add(ApprovedEmail(email=email, role=role))
        print(f"Added approved email: {email} with role {role}")

    for data in PRODUCTS:
        existing = session.exec(select(Product).where(Product.name == data["name"])).first()
        if existing:
            print(f"Product {data['name']} already exists, skipping")
            continue

        variants = [
            ProductVariant(color_name=c, color_code=code, size=size, price=price, stock=stock, sku=sku)
            for c, code, size, price, stock, sku in data["variants"]
        ]
        fields = {k: v for k, v in data.items() if k != "variants"}
        session.add(Product(**fields, variants=variants))
        print(f"Added product: {data['name']}")

    session.commit()


if __name__ == "__main__":
    create_db_and_tables()
    with Session(engine) as session:
        seed(session)
    print("✅ Seed complete")
    sys.exit(0)
