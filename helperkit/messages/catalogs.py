"""Built-in message catalogs, keyed by language code."""

from types import MappingProxyType

MESSAGES_EN = MappingProxyType(
    {
        "welcome": "Welcome!",
        "login_success": "You have logged in successfully.",
        "login_failed": "Invalid email or password.",
        "logout_success": "You have been logged out.",
        "session_expired": "Your session has expired. Please log in again.",
        "network_error": "Unable to reach the server. Check your connection.",
        "server_error": "Something went wrong. Please try again later.",
        "not_found": "The requested resource was not found.",
        "unauthorized": "You are not authorized to perform this action.",
        "invalid_email": "Please enter a valid email address.",
        "invalid_phone": "Please enter a valid 10-digit phone number.",
        "required_field": "This field is required.",
        "saved": "Changes saved.",
    }
)

MESSAGES_HI = MappingProxyType(
    {
        "welcome": "स्वागत है!",
        "login_success": "आपने सफलतापूर्वक लॉग इन कर लिया है।",
        "login_failed": "अमान्य ईमेल या पासवर्ड।",
        "logout_success": "आप लॉग आउट हो गए हैं।",
        "session_expired": "आपका सत्र समाप्त हो गया है। कृपया फिर से लॉग इन करें।",
        "network_error": "सर्वर तक नहीं पहुँच सके। अपना कनेक्शन जाँचें।",
        "server_error": "कुछ गलत हो गया। कृपया बाद में पुनः प्रयास करें।",
        "unauthorized": "आपको यह कार्य करने की अनुमति नहीं है।",
        "invalid_email": "कृपया एक मान्य ईमेल पता दर्ज करें।",
        "required_field": "यह फ़ील्ड आवश्यक है।",
    }
)

CATALOGS = MappingProxyType({"en": MESSAGES_EN, "hi": MESSAGES_HI})
