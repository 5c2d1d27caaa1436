"""Product RPC command table."""

from __future__ import annotations

from modules.core.dtos import PaginationDTO
from modules.core.rpc.dispatcher import route
from modules.products import handlers
from modules.products.dtos import CreateProductDTO, ProductIdDTO, UpdateProductDTO

commandpatterns = [
    route("create_product", handlers.create_product, CreateProductDTO),
    route("find_all_products", handlers.find_all_products, PaginationDTO),
    route("find_one_product", handlers.find_one_product, ProductIdDTO),
    route("update_product", handlers.update_product, UpdateProductDTO),
    route("delete_product", handlers.delete_product, ProductIdDTO),
]
