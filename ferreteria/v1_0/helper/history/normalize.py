from datetime import tzinfo
from typing import Any, Iterable, List

from pydantic import ValidationError as PydanticValidationError

from ferreteria.core.errors import MalformedResponseError
from ferreteria.core.logger import logger
from ferreteria.v1_0.entities import MovementDTO
from ferreteria.v1_0.helper.io.normalizers import parse_timestamp, to_str
from ferreteria.v1_0.schemas import MovementIn


def normalize_movement(raw: Any, tz: tzinfo) -> MovementDTO:
    try:
        item = MovementIn.model_validate(raw)
        display, sort = parse_timestamp(item.timestamp, tz)
    except (PydanticValidationError, ValueError, TypeError) as e:
        logger.warning("[HistoryNormalize] registro inválido: %s", e)
        raise MalformedResponseError() from e
    return MovementDTO.build(
        product_name=to_str(item.product_name),
        product_code=to_str(item.product_code),
        quantity=item.quantity,
        previous_stock=item.previous_stock,
        new_stock=item.new_stock,
        final_cost=item.final_cost,
        operation=to_str(item.operation),
        display_timestamp=display,
        sort_timestamp=sort,
    )


def normalize_movements(items: Iterable[Any], tz: tzinfo) -> List[MovementDTO]:
    return [normalize_movement(raw, tz) for raw in items]
