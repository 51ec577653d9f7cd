# Display labels for catalog categories; unknown categories show their raw name.
CATEGORY_LABELS = {
    "all": "Todos los productos",
    "Sports & Outdoors": "Deportes y aire libre",
    "Electronics": "Electrónica",
    "Home & Kitchen": "Hogar y Cocina",
    "Office": "Oficina",
    "Accessories": "Accesorios",
    "Gaming": "Gaming",
    "Fashion": "Moda",
    "Beauty": "Belleza",
    "Photography": "Fotografía",
    "Wearables": "Wearables",
}


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)
