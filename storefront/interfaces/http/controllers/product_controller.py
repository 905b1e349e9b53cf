# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response, jsonify, request
from pydantic import ValidationError

from storefront.application.services.product_service import ProductService
from storefront.domain.entities import AuthIdentity, AuthScheme
from storefront.interfaces.http.dispatcher import Route, RouteGroup
from storefront.interfaces.http.dto.common import MessageDTO
from storefront.interfaces.http.dto.products import (
    ProductCreateDTO,
    ProductCreatedDTO,
    ProductDTO,
    ProductListDTO,
    ProductListQueryDTO,
    ProductUpdateDTO,
)
from storefront.interfaces.http.request_body import json_object
from storefront.shared.errors.validation import raise_validation_error
from storefront.shared.logging import logger


class ProductController:
    def __init__(self, *, products: ProductService) -> None:
        self._products = products

    def index(self, identity: AuthIdentity) -> tuple[Response, int]:
        try:
            query = ProductListQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        filters = query.to_filters()
        rows, total = self._products.list(filters)
        payload = ProductListDTO.build(rows, total, filters)
        return jsonify(payload.model_dump(mode="json")), 200

    def store(self, identity: AuthIdentity) -> tuple[Response, int]:
        body = json_object()
        try:
            dto = ProductCreateDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        product_id = self._products.create(dto.model_dump())
        logger.info(f"products.store: ok id={product_id} by={identity.subject_id}")
        return jsonify(ProductCreatedDTO(id=product_id).model_dump()), 201

    def show(self, identity: AuthIdentity, product_id: int) -> tuple[Response, int]:
        row = self._products.get(product_id)
        return jsonify(ProductDTO.model_validate(row).model_dump(mode="json")), 200

    def update(self, identity: AuthIdentity, product_id: int) -> tuple[Response, int]:
        # Existence is checked before the body so a missing row is a 404 either way.
        self._products.get(product_id)
        body = json_object()
        try:
            dto = ProductUpdateDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        changed = self._products.update(product_id, dto.changes())
        message = "Product updated" if changed else "No changes applied"
        return jsonify(MessageDTO(message=message).model_dump()), 200

    def destroy(self, identity: AuthIdentity, product_id: int) -> tuple[Response, int]:
        self._products.delete(product_id)
        logger.info(f"products.destroy: ok id={product_id} by={identity.subject_id}")
        return jsonify(MessageDTO(message="Product deleted").model_dump()), 200

    def route_group(self) -> RouteGroup:
        return RouteGroup(
            name="products",
            prefix="/api/products",
            auth=AuthScheme.TOKEN,
            routes=(
                Route("", "index", self.index, ("GET",)),
                Route("", "store", self.store, ("POST",)),
                Route("/<int:product_id>", "show", self.show, ("GET",)),
                Route("/<int:product_id>", "update", self.update, ("PUT",)),
                Route("/<int:product_id>", "destroy", self.destroy, ("DELETE",)),
            ),
        )
