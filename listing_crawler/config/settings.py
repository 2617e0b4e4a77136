"""
爬虫通用设置
"""

RETRY_TIMES = 3      # 超时重试次数(不含首次请求)
RETRY_INTERVAL = 0   # 重试间隔(秒), 0 表示立即重试
REQUEST_TIMEOUT = 30 # 单次请求超时时间(秒)

CACHE_DIR = "./cache"
CACHE_TTL = 60 * 60  # 1小时

DOWNLOADER_CONFIG = {
    'retry_times': RETRY_TIMES,
    'retry_interval': RETRY_INTERVAL,
    'timeout': REQUEST_TIMEOUT,
}

CACHE_CONFIG = {
    'cache_dir': CACHE_DIR,
    'ttl': CACHE_TTL,
}

# 日志设置, 输出到 stderr, stdout 只保留结果
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'detailed': {
            'format': '%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s'
        }
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'detailed',
            'stream': 'ext://sys.stderr'
        }
    },
    'loggers': {
        '': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True
        }
    }
}
