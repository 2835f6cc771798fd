import logging
import sys
import json
import inspect
import time
from pathlib import Path
from functools import wraps
import traceback

from src.core import get_settings

settings = get_settings()

# Цвета для консольного вывода
BLUE = '\033[94m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
PURPLE = '\033[95m'
CYAN = '\033[96m'
END = '\033[0m'

MAX_RESULT_LENGTH = 1000


def format_object(obj):
    """Render an object for a log line: dataclasses and models by fields, containers as JSON"""
    if hasattr(obj, "model_dump"):
        return str(obj.model_dump())
    if hasattr(obj, '__dict__'):
        return str(obj.__dict__)
    if isinstance(obj, (list, dict, tuple, set)):
        try:
            return json.dumps(obj, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(obj)
    return str(obj)


def _caller_location(depth: int = 2) -> str:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "unknown"
    filename = frame.f_code.co_filename
    # Путь относительно пакета src
    src_index = filename.rfind("src")
    if src_index != -1:
        filename = filename[src_index:]
    return f"{filename}:{frame.f_lineno} - {frame.f_code.co_name}"


class DebugLogger:
    """Debug logger with caller info and colored output for board operations"""

    def __init__(self, name="debug", level=None):
        if level is None:
            level = logging.DEBUG if settings.DEBUG else logging.INFO

        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        if self.logger.handlers:
            self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if settings.LOG_TO_FILE:
            log_dir = Path(settings.LOG_DIR)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir / "debug.log", encoding='utf-8')
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

    def debug(self, message, *args, **kwargs):
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        caller_info = f"{BLUE}[{_caller_location()}]{END}"
        self.logger.debug(f"{caller_info} {message}", *args, **kwargs)

    def info(self, message, *args, **kwargs):
        self.logger.info(f"{GREEN}{message}{END}", *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        self.logger.warning(f"{YELLOW}{message}{END}", *args, **kwargs)

    def error(self, message, *args, **kwargs):
        """Error line; the active traceback is appended when there is one"""
        trace = traceback.format_exc()
        if trace and trace != 'NoneType: None\n':
            message = f"{message}\n{RED}Traceback:{END}\n{trace}"
        self.logger.error(f"{RED}{message}{END}", *args, **kwargs)

    def start_func(self, func_name, params=None):
        params_str = f" с параметрами: {format_object(params)}" if params else ""
        self.debug(f"{PURPLE}Начало выполнения {func_name}{END}{params_str}")

    def end_func(self, func_name, result=None, execution_time=None):
        result_str = ""
        if result is not None:
            formatted = format_object(result)
            result_str = f", результат: {formatted[:MAX_RESULT_LENGTH]}"
            if len(formatted) > MAX_RESULT_LENGTH:
                result_str += "... [обрезано]"

        time_str = ""
        if execution_time is not None:
            time_str = f", время выполнения: {execution_time:.4f}с"

        self.debug(f"{PURPLE}Окончание выполнения {func_name}{END}{result_str}{time_str}")

    def log_exception(self, message="Произошло исключение"):
        exc_type, exc_value, _ = sys.exc_info()
        if exc_type:
            self.error(f"{message}: {exc_type.__name__}: {exc_value}")
        else:
            self.error(message)

    def log_request(self, request, extra_info=None):
        """Log an incoming HTTP request"""
        method = getattr(request, 'method', 'UNKNOWN')
        url = str(getattr(request, 'url', 'UNKNOWN'))
        client = getattr(request, 'client', None)
        client_host = client.host if client else "unknown"

        info = f"{CYAN}HTTP запрос:{END} {method} {url} {CYAN}от{END} {client_host}"
        if extra_info:
            info += f"\n{CYAN}Дополнительно:{END} {extra_info}"
        self.debug(info)

    def log_response(self, response, process_time=None):
        """Log an outgoing HTTP response"""
        status_code = getattr(response, 'status_code', 0)
        color = GREEN if 200 <= status_code < 400 else YELLOW if 400 <= status_code < 500 else RED

        info = f"{CYAN}HTTP ответ:{END} {color}Статус {status_code}{END}"
        if process_time is not None:
            info += f" {CYAN}за{END} {process_time:.3f}с"
        self.debug(info)


def log_function(logger=None):
    """Decorator logging entry, exit, timing and failures of a function"""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            active_logger = logger or debug_logger

            func_args = dict(zip(inspect.getfullargspec(func).args, args))
            func_args.update(kwargs)
            func_args.pop('self', None)
            func_args.pop('cls', None)

            start_time = time.perf_counter()
            active_logger.start_func(func.__qualname__, func_args)

            try:
                result = func(*args, **kwargs)
            except Exception:
                active_logger.log_exception(f"Ошибка в функции {func.__qualname__}")
                raise

            active_logger.end_func(func.__qualname__, result, time.perf_counter() - start_time)
            return result

        return wrapper

    return decorator


debug_logger = DebugLogger()
