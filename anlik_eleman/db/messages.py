"""
Localized (Turkish) user-facing messages.

The façade turns every remote failure into one of these strings so pages
can display ``result.error.message`` as is.
"""

from anlik_eleman.remote.errors import PlatformError

# Transport
NETWORK_ERROR = "Ağ bağlantısı hatası. İnternet bağlantınızı kontrol edin."
REQUEST_TIMED_OUT = "İstek zaman aşımına uğradı. Tekrar deneyin."
UNEXPECTED_ERROR = "Beklenmeyen bir hata oluştu. Lütfen tekrar deneyin."
OFFLINE = "İnternet bağlantınızı kontrol edin"

# Configuration
PLATFORM_NOT_CONFIGURED = "Sunucu yapılandırması eksik. Lütfen yöneticiye başvurun."
DATABASE_NOT_CONFIGURED = "Veritabanı bağlantısı yapılandırılmamış"

# Identity
EMAIL_AND_PASSWORD_REQUIRED = "E-posta ve şifre gereklidir"
INVALID_EMAIL = "Geçersiz e-posta adresi formatı"
PASSWORD_TOO_SHORT = "Şifre en az 6 karakter olmalıdır"
ALREADY_REGISTERED = "Bu e-posta adresi zaten kayıtlı"
SIGNUP_DISABLED = "Kayıt işlemi şu anda devre dışı"
SIGNUP_FAILED = "Kayıt sırasında hata oluştu"
INVALID_CREDENTIALS = "E-posta veya şifre hatalı"
EMAIL_NOT_CONFIRMED = "E-posta adresinizi onaylamanız gerekiyor"
TOO_MANY_REQUESTS = "Çok fazla deneme. Lütfen daha sonra tekrar deneyin."
SIGNIN_FAILED = "Giriş sırasında hata oluştu"
SIGNOUT_UNEXPECTED = "Çıkış sırasında beklenmeyen bir hata oluştu"
CURRENT_USER_FAILED = "Kullanıcı bilgileri alınamadı"
SESSION_FETCH_FAILED = "Oturum alınamadı"
VERIFICATION_EMAIL_FAILED = "Doğrulama e-postası gönderilemedi"
VERIFY_EMAIL_FAILED = "E-posta doğrulanamadı"
PASSWORD_RESET_FAILED = "Şifre sıfırlama e-postası gönderilemedi"

# Session / profile bootstrap
SESSION_LOAD_FAILED = "Oturum bilgileri alınamadı"
AUTH_INIT_FAILED = "Kimlik doğrulama başlatılamadı"
AUTH_CHANGE_FAILED = "Kimlik doğrulama durumu güncellenemedi"
PROFILE_LOAD_FAILED = "Profil bilgileri yüklenemedi"
PROFILE_LOAD_UNEXPECTED = "Profil bilgileri yüklenirken hata oluştu"
PROFILE_CREATE_FAILED = "Profil oluşturulamadı"
PROFILE_CREATE_UNEXPECTED = "Profil oluşturulurken hata oluştu"
PROFILE_UPDATE_FAILED = "Profil güncellenemedi"
PROFILE_UPDATE_UNEXPECTED = "Profil güncellenirken hata oluştu"
NO_ACTIVE_USER = "Kullanıcı oturumu bulunamadı"
SIGNOUT_FAILED = "Çıkış yapılırken bir hata oluştu"
SIGNUP_UNEXPECTED = "Kayıt olurken beklenmeyen bir hata oluştu"
SIGNIN_UNEXPECTED = "Giriş yapılırken beklenmeyen bir hata oluştu"

# Row-level failures, appended to the operation's message
DUPLICATE_RECORD = "Bu kayıt zaten mevcut"
PERMISSION_DENIED = "Bu işlem için yetkiniz yok"
RECORD_NOT_FOUND = "Kayıt bulunamadı"

_DATA_ERROR_DETAILS = {
    "23505": DUPLICATE_RECORD,
    "42501": PERMISSION_DENIED,
    "PGRST116": RECORD_NOT_FOUND,
}

_SIGN_UP_ERRORS = [
    ("Invalid email", INVALID_EMAIL),
    ("invalid format", INVALID_EMAIL),
    ("Password should be at least", PASSWORD_TOO_SHORT),
    ("User already registered", ALREADY_REGISTERED),
    ("already been registered", ALREADY_REGISTERED),
    ("signup is disabled", SIGNUP_DISABLED),
    ("Signups not allowed", SIGNUP_DISABLED),
    ("rate limit", TOO_MANY_REQUESTS),
]

_SIGN_IN_ERRORS = [
    ("Invalid login credentials", INVALID_CREDENTIALS),
    ("Email not confirmed", EMAIL_NOT_CONFIRMED),
    ("Too many requests", TOO_MANY_REQUESTS),
    ("rate limit", TOO_MANY_REQUESTS),
]


def _match(message: str, table: list[tuple[str, str]]) -> str | None:
    lowered = message.lower()
    for needle, localized in table:
        if needle.lower() in lowered:
            return localized
    return None


def localize_sign_up_error(error: PlatformError, fallback: str) -> str:
    return _match(error.message, _SIGN_UP_ERRORS) or fallback


def localize_sign_in_error(error: PlatformError, fallback: str) -> str:
    if error.status == 429:
        return TOO_MANY_REQUESTS
    return _match(error.message, _SIGN_IN_ERRORS) or fallback


def localize_data_error(error: PlatformError, fallback: str) -> str:
    """Operation message, qualified with the cause when the code is known."""
    detail = _DATA_ERROR_DETAILS.get(error.code or "")
    if detail is None and error.status in (401, 403):
        detail = PERMISSION_DENIED
    return f"{fallback}: {detail}" if detail else fallback
