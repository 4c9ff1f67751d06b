from typing import Any, Dict, Optional


class ApiResponseTemplate:
    """Utilitarios para dar forma a las respuestas API."""

    @staticmethod
    def success(
        data: Any = None,
        message: str = "OK",
        status_code: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": True, "data": data, "message": message}
        meta = dict(metadata or {})
        if status_code:
            meta.setdefault("status_code", status_code)
        if meta:
            payload["metadata"] = meta
        return payload

    @staticmethod
    def error(detail: Any, redirect: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": False, "error": detail}
        if redirect:
            payload["redirect"] = redirect
        return payload
