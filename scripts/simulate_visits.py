"""
Script para generar visitas de prueba contra un backend en ejecución.
Crea un script de seguimiento y envía beacons repartidos en los últimos días.
Ejecutar: python scripts/simulate_visits.py [BASE_URL]
"""
import random
import sys
from datetime import datetime, timedelta

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"
USER_ID = "demo-user"
NUM_VISITS = 40
DAYS_BACK = 5

CITIES = [
    ("Mendoza", "-32.8895", "-68.8458"),
    ("Buenos Aires", "-34.6037", "-58.3816"),
    ("Madrid", "40.4168", "-3.7038"),
    (None, None, None),
]

USER_AGENTS = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1",
]


def simulate():
    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        response = client.post("/script", json={"userId": USER_ID, "scriptName": "demo"})
        response.raise_for_status()
        script_id = response.json()["scriptId"]
        print(f"📜 Script creado: {script_id}")

        for _ in range(NUM_VISITS):
            city, latitude, longitude = random.choice(CITIES)
            visited_at = datetime.utcnow() - timedelta(days=random.randint(0, DAYS_BACK - 1))
            beacon = {
                "scriptId": script_id,
                "userId": USER_ID,
                "ipAddress": "demo.example.com",
                "timestamp": visited_at.isoformat() + "Z",
                "userAgent": random.choice(USER_AGENTS),
                "timeSpent": round(random.uniform(1, 300), 2),
                "city": city,
                "latitude": latitude,
                "longitude": longitude,
                "pageViews": random.randint(1, 8),
            }
            try:
                client.post("/track", json=beacon).raise_for_status()
            except httpx.HTTPError as e:
                print(f"❌ Error enviando visita: {e}")

        graph = client.get(f"/analytics/graph/{script_id}", params={"days": DAYS_BACK}).json()
        print("\n📊 Visitas por día:")
        for point in graph["graphData"]:
            print(f"   {point['date']}: {point['count']}")


if __name__ == "__main__":
    simulate()
