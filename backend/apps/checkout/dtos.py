from dataclasses import dataclass


@dataclass
class CheckoutResultDTO:
    whatsapp_url: str
    message: str
    item_count: int
    subtotal: int
    total: int


@dataclass
class InquiryDTO:
    product_id: int
    whatsapp_url: str
    message: str
