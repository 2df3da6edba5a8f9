"""Internal constants shared across the library."""

BASE_URL = "http://192.168.0.112:5556"
SYSTEM_INFO_PATH = "/system_info"
USER_AGENT = "pyaida64/0.1"

#: AIDA64 sensor ids for the discrete GPU fan speed and GPU diode temperature.
FAN_SPEED_KEY = "DGPU1"
GPU_TEMPERATURE_KEY = "TGPU1"

DEFAULT_POLL_INTERVAL: float = 3.0
DEFAULT_REQUEST_TIMEOUT: float = 2.5

ROTATION_SPEED_MIN = 0.0
ROTATION_SPEED_MAX = 100.0

ACCESSORY_MANUFACTURER = "Jiayin"
ACCESSORY_MODEL = "3080"
ACCESSORY_SERIAL_NUMBER = "66666"
ACCESSORY_DEVICE_NAME = "GPU Fan"
TEMPERATURE_SENSOR_NAME = "GPU temperature"
