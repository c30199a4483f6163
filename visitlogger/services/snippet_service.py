"""
Snippet de JavaScript que los sitios embeben para reportar visitas.
"""
import json
from urllib.parse import urlencode

GEOLOCATION_URL = "https://ipapi.co/json/"

TRACKER_TEMPLATE = """
(function() {
  const scriptId = __SCRIPT_ID__;
  const userId = __USER_ID__;
  const ipAddress = window.location.hostname;
  const startTime = Date.now();
  let locationData = { city: "Unknown", latitude: "0", longitude: "0" };
  let pageViews = 1;

  async function initializeLocation() {
    try {
      const response = await fetch(__GEOLOCATION_URL__);
      const data = await response.json();
      locationData = {
        city: data.city || "Unknown",
        latitude: data.latitude ? data.latitude.toString() : "0",
        longitude: data.longitude ? data.longitude.toString() : "0"
      };
    } catch (error) {
      console.error("Error fetching location:", error);
    }
  }

  initializeLocation();

  window.addEventListener("beforeunload", function() {
    const timeSpent = ((Date.now() - startTime) / 1000).toFixed(2);
    const data = {
      scriptId,
      userId,
      ipAddress,
      timestamp: new Date().toISOString(),
      userAgent: navigator.userAgent,
      timeSpent: timeSpent.toString(),
      city: locationData.city,
      latitude: locationData.latitude,
      longitude: locationData.longitude,
      pageViews: pageViews.toString()
    };
    navigator.sendBeacon(__TRACK_URL__, JSON.stringify(data));
  });
})();
"""

MISSING_PARAMS_COMMENT = "// Missing scriptId or userId"


def script_url(base_url: str, script_id: str, user_id: str) -> str:
    """URL del snippet alojado para un script."""
    query = urlencode({"scriptId": script_id, "userId": user_id})
    return f"{base_url.rstrip('/')}/track.js?{query}"


def render_tracker(base_url: str, script_id: str, user_id: str) -> str:
    """
    Genera el snippet con los identificadores embebidos.
    Los valores se escriben como literales JSON para que no puedan romper el script.
    """
    replacements = {
        "__SCRIPT_ID__": json.dumps(script_id),
        "__USER_ID__": json.dumps(user_id),
        "__GEOLOCATION_URL__": json.dumps(GEOLOCATION_URL),
        "__TRACK_URL__": json.dumps(f"{base_url.rstrip('/')}/track"),
    }
    source = TRACKER_TEMPLATE
    for placeholder, value in replacements.items():
        source = source.replace(placeholder, value.replace("</", "<\\/"))
    return source


def render_inline_tag(base_url: str, script_id: str, user_id: str) -> str:
    """Variante antigua: el snippet completo dentro de una etiqueta <script>."""
    return f"<script>{render_tracker(base_url, script_id, user_id)}</script>"
