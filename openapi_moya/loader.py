"""
Загрузка OpenAPI документа из файла или по URL
"""

import json
import logging
import os
from typing import Any, Dict, Optional

import httpx

from .exceptions import DocumentError

logger = logging.getLogger(__name__)


def load_document(source: str, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """Чтение JSON документа: локальный путь или http(s) URL"""
    if source.startswith(("http://", "https://")):
        document = _load_url(source, client)
    elif os.path.exists(source):
        logger.debug("Чтение файла %s", source)
        try:
            with open(source, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise DocumentError(f"Не удалось прочитать документ: {e}", source) from e
    else:
        raise DocumentError("Файл не найден", source)

    if not isinstance(document, dict):
        raise DocumentError("Корень документа должен быть объектом", source)

    return document


def _load_url(url: str, client: Optional[httpx.Client] = None) -> Any:
    logger.debug("Загрузка %s", url)
    try:
        if client is not None:
            response = client.get(url)
        else:
            response = httpx.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        raise DocumentError(f"Не удалось загрузить документ: {e}", url) from e
    except ValueError as e:
        raise DocumentError(f"Ответ не является JSON: {e}", url) from e
