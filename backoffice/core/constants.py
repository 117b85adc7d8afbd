"""常量定义：集中维护 HTTP 状态码与业务层面的固定取值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

ACCESS_TOKEN_TYPE = "bearer"

# 超级权限等级：不受菜单授权约束，可访问全部启用菜单
SUPER_ADMIN_AUTHORITY = 999

DEFAULT_ADMIN_NAME = "系统管理员"

# 首页菜单：初始化时写入，作为所有权限等级的公共入口
HOME_MENU_NAME = "首页"
HOME_MENU_URL = "/"
HOME_MENU_ICON = "mdi-home"

APP_TITLE_CACHE_KEY = "app_title"
