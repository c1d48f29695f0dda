"""Default GeoLite city name translations to CWA location names."""

from types import MappingProxyType

DEFAULT_CITY = "臺北市"

DEFAULT_CITY_TRANSLATIONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "taipei": "臺北市",
        "new taipei": "新北市",
        "banqiao": "新北市",
        "taoyuan": "桃園市",
        "taoyuan city": "桃園市",
        "taichung": "臺中市",
        "tainan": "臺南市",
        "kaohsiung": "高雄市",
        "kaohsiung city": "高雄市",
        "keelung": "基隆市",
        "hsinchu": "新竹市",
        "zhubei": "新竹縣",
        "miaoli": "苗栗縣",
        "changhua": "彰化縣",
        "nantou": "南投縣",
        "douliu": "雲林縣",
        "chiayi": "嘉義市",
        "chiayi city": "嘉義市",
        "taibao": "嘉義縣",
        "pingtung": "屏東縣",
        "yilan": "宜蘭縣",
        "hualien": "花蓮縣",
        "hualien city": "花蓮縣",
        "taitung": "臺東縣",
        "taitung city": "臺東縣",
        "magong": "澎湖縣",
        "jincheng": "金門縣",
        "nangan": "連江縣",
    }
)
