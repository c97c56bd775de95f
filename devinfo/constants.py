"""
Device attribute constants.

Centralizes configuration defaults, property keys, and optional service names.
"""

# Snapshot Constants
OS_NAME = "android"
DISTINGUISHED_VENDOR = "Amazon"

# Secure Settings Keys
SETTING_ADVERTISING_ID = "advertising_id"
SETTING_LIMIT_AD_TRACKING = "limit_ad_tracking"
SETTING_LOCATION_PROVIDERS = "location_providers_allowed"

# Telephony Phone Types (matches android.telephony.TelephonyManager)
PHONE_TYPE_NONE = 0
PHONE_TYPE_GSM = 1
PHONE_TYPE_CDMA = 2
PHONE_TYPE_SIP = 3

# Build / Telephony System Properties
PROP_OS_VERSION = "ro.build.version.release"
PROP_BRAND = "ro.product.brand"
PROP_MANUFACTURER = "ro.product.manufacturer"
PROP_MODEL = "ro.product.model"
PROP_PHONE_TYPE = "gsm.current.phone-type"
PROP_NETWORK_ISO = "gsm.operator.iso-country"
PROP_OPERATOR_NAME = "gsm.operator.alpha"
PROP_LOCALE = "persist.sys.locale"
PROP_PRODUCT_LOCALE = "ro.product.locale"

# Location Permissions
PERMISSION_FINE_LOCATION = "android.permission.ACCESS_FINE_LOCATION"
PERMISSION_COARSE_LOCATION = "android.permission.ACCESS_COARSE_LOCATION"

# Optional Services (dotted module names probed at runtime)
DEFAULT_ADVERTISING_ID_SERVICE = "gms.ads.identifier.advertising_id_client"
DEFAULT_APP_SET_ID_SERVICE = "gms.appset.app_set"
DEFAULT_AVAILABILITY_SERVICE = "gms.common.google_play_services_util"

# status 0 corresponds to ConnectionResult.SUCCESS
SERVICE_AVAILABLE_SUCCESS = 0

# Geocoding
DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_GEOCODER_LANGUAGE = "en"
GEOCODER_USER_AGENT = "devinfo/0.1"

# Default Configuration Values
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOCATION_LISTENING = True
APP_DIR_NAME = "devinfo"
