"""配置变量服务：通过读穿透缓存对外提供应用级配置值。"""

from typing import Any, Dict

from backoffice.core.cache import cached
from backoffice.core.config import get_settings
from backoffice.core.constants import APP_TITLE_CACHE_KEY, HTTP_STATUS_OK
from backoffice.core.responses import create_response


class VariableService:
    def get_app_title(self) -> Dict[str, Any]:
        title = cached(APP_TITLE_CACHE_KEY, lambda: get_settings().app_title)
        return create_response("获取应用标题成功", title, HTTP_STATUS_OK)


variable_service = VariableService()
