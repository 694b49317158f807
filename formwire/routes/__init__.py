"""APIRouter builders for the webhook listener."""
