import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


class RequestLogger:
    """请求审计日志: one line per HTTP call, never the body or credentials."""

    def __init__(self, log_dir="logs", log_name="clientapi_requests", backup_days=30):
        """
        初始化请求日志记录器

        Args:
            log_dir: 日志目录
            log_name: 日志文件名前缀
            backup_days: 保留天数
        """
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        self.log_file = log_path / f"{log_name}.log"

        self.logger = logging.getLogger(f"clientapi.audit.{log_name}")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        # 避免重复添加handler
        if not self.logger.handlers:
            # 日志格式: 时间|方法|命令|状态|耗时ms|nonce
            formatter = logging.Formatter(
                '%(asctime)s|%(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler = TimedRotatingFileHandler(
                filename=self.log_file,
                when='midnight',
                interval=1,
                backupCount=backup_days,
                encoding='utf-8'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_request(self, method, command, status, elapsed_ms, nonce=None):
        """
        记录一次请求

        Args:
            method: GET / POST
            command: 命令名, 例如 'addorder'
            status: HTTP状态码, 网络失败时为 None
            elapsed_ms: 耗时(毫秒)
            nonce: 签名请求的 number 字段
        """
        self.logger.info(
            f"{method}|{command}|{status if status is not None else 'ERR'}|"
            f"{elapsed_ms}|{nonce if nonce is not None else '-'}"
        )

    def close(self):
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)
