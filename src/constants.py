"""All magic values live here: no inline literals anywhere else."""

# Groq exposes an OpenAI-compatible chat-completions API under this base URL.
GROQ_BASE_URL = "https://api.groq.com/openai/v1"

# Models and sampling
DEFAULT_TEXT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
TEMPERATURE: float = 0.7
MAX_TOKENS = 1024
# One call per request, the SDK must not retry on its own.
MAX_RETRIES = 0

# Image encoding
# Every upload is labelled JPEG in the data URI, whatever the real format.
IMAGE_MEDIA_TYPE = "image/jpeg"
DATA_URI_TEMPLATE = "data:%s;base64,%s"
UPLOAD_FILE_PREFIX = "upload-"

# Server defaults
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = "5000"
DEFAULT_ENVIRONMENT = "development"
PRODUCTION_ENVIRONMENT = "production"
DEFAULT_UPLOAD_DIR = "uploads"
DEV_ORIGINS = ("http://localhost:5173", "http://localhost:3000")

# Routes
ROUTE_CHAT_MESSAGE = "/api/chat/message"
ROUTE_VISION_ANALYZE = "/api/vision/analyze"
ROUTE_TEST = "/api/test"
ROUTE_HEALTH = "/api/health"
FIELD_MESSAGE = "message"
FIELD_IMAGE = "image"
FIELD_PROMPT = "prompt"

# Prompts and placeholders
MSG_IMAGE_DEFAULT_PROMPT = "What's in this image?"
MSG_NO_RESPONSE = "No response generated."
MSG_NO_ANALYSIS = "No analysis generated."

# Client-facing errors
MSG_ERR_MESSAGE_REQUIRED = "Message is required"
MSG_ERR_NO_IMAGE = "No image uploaded"
MSG_ERR_CHAT_FAILED = "Failed to process your message"
MSG_ERR_VISION_FAILED = "Failed to analyze image"
MSG_ERR_GENERATION_FAILED = "Failed to generate AI response"
MSG_ERR_MALFORMED_RESPONSE = "Malformed completion response: choices is %s"

# Log messages
MSG_SERVER_RUNNING = "✅ Backend server is running!"
MSG_SERVER_STARTING = "🚀 Server running on http://localhost:%s"
MSG_TEST_ENDPOINT = "📝 Test endpoint: http://localhost:%s%s"
MSG_LOG_TEXT_API_ERROR = "❌ Groq API Error"
MSG_LOG_VISION_API_ERROR = "❌ Vision API Error"
MSG_LOG_CHAT_ERROR = "Chat error: %s"
MSG_LOG_VISION_ERROR = "Vision route error: %s"
MSG_LOG_CLEANUP_FAILED = "Failed to delete temp file %s: %s"
MSG_LOG_UPLOAD_SAVED = "Saved upload to %s (%d bytes)"
MSG_LOG_PERSIST_FAILED = "Could not persist upload"
MSG_LOG_BODY_REJECTED = "Rejected unparseable vision body: %s"
MSG_LOG_DISPATCH_TEXT = "→ %s"
MSG_LOG_DISPATCH_VISION = "→ %s (image)"
EVENT_CLEANUP_FAILED = "upload_cleanup_failed"
