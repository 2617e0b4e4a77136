"""carsales 站点配置"""

# 默认搜索: 自动挡 Subaru Outback, 价格 20000 以内, 里程 200000 以内, 按里程排序
START_URL = (
    'https://www.carsales.com.au/cars/results?q=%28And.Service.Carsales._.'
    '%28C.Make.Subaru._.Model.Outback.%29_.GenericGearType.Automatic._.'
    'Price.range%280..20000%29._.Odometer.range%280..200000%29.%29'
    '&limit=24&sortby=~Odometer'
)

# 爬取限制, None 表示不限制
MAX_PAGES = 500

# 输出格式: csv 或 text
OUTPUT_FORMAT = 'csv'

# 页面选择器
SELECTORS = {
    'item': '.listing-item',
    'title': 'h2',
    'price': '.price',
    'feature_title': '.feature-title',
    'feature_text': '.feature-text',
    'state': '.state',
    'next': '.next a',
}

ODOMETER_FEATURE = 'Odometer'
