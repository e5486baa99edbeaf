import os


# utilities
def tobool(val: str | None):
    if val is None:
        return False
    val = val.lower().strip()
    if val in ['y', 'yes', 'true', '1']:
        return True
    return False


def tolist(val: str | None):
    if not val:
        return []
    return [item.strip() for item in val.split(',') if item.strip()]


# general
app_port = int(os.environ.get('PORT', 3000))
log_level = os.environ.get('LOG_LEVEL', 'DEBUG').strip().upper()
max_body_size = int(os.environ.get('MAX_BODY_SIZE', 50 * 1024 * 1024))  # 50MB default

# cors
cors_allow_origins = tolist(os.environ.get('CORS_ALLOW_ORIGINS', 'https://learn.bcit.ca'))
cors_allow_origin_regex = os.environ.get('CORS_ALLOW_ORIGIN_REGEX', r'chrome-extension://.*') or None

# openai api
openai_api_key = os.environ.get('OPENAI_API_KEY')
openai_api_base_url = os.environ.get('OPENAI_API_BASE_URL', 'https://api.openai.com/v1').rstrip('/')
openai_model = os.environ.get('OPENAI_MODEL', 'gpt-4o-mini')
openai_request_timeout = float(os.environ.get('OPENAI_REQUEST_TIMEOUT', 60))

# summaries
summary_max_tokens = int(os.environ.get('SUMMARY_MAX_TOKENS', 200))
summary_temperature = float(os.environ.get('SUMMARY_TEMPERATURE', 0.2))

# monitoring
enable_metrics = tobool(os.environ.get('ENABLE_METRICS', 'true'))
