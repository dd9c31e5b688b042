# -*- coding: utf-8 -*-
"""
节假日规则引擎 - 后端服务入口
"""

from redday import create_app
from redday.config import APP_VERSION, DATA_DIR, SERVER_HOST, SERVER_PORT
from redday.log import setup_logging

setup_logging()
app = create_app()


# ==================== 启动 ====================
if __name__ == '__main__':
    print("=" * 50)
    print(f"  节假日规则引擎 v{APP_VERSION}")
    print(f"  数据目录: {DATA_DIR}")
    print(f"  访问地址: http://localhost:{SERVER_PORT}")
    print("=" * 50)
    app.run(host=SERVER_HOST, port=SERVER_PORT, debug=False, threaded=True)
