import asyncio
import httpx

BASE_URL = "http://127.0.0.1:8085"

async def create_product(client: httpx.AsyncClient, n: int):
    payload = {
        "name": f"Concurrent Test Ale {n}",
        "shortName": f"Test {n}",
        "category": {"id": 11, "name": "Hybrid/mixed Beer"},
    }
    r = await client.post("/products", json=payload)
    if r.status_code == 201:
        print(f"✅ request {n} created product {r.json()['id']}")
        return r.json()["id"]
    print(f"❌ request {n} failed with HTTP {r.status_code}")
    return None

async def main():
    async with httpx.AsyncClient(base_url=BASE_URL, timeout=10) as client:
        print("\n⚡ Creating 10 products concurrently...")
        ids = await asyncio.gather(*(create_product(client, n) for n in range(10)))

    created = [i for i in ids if i is not None]
    # a single uvicorn worker serializes the handlers; with several workers
    # each process has its own list and ids can repeat across them
    print(f"\n📦 {len(created)} created, {len(set(created))} distinct ids: {sorted(created)}")

if __name__ == "__main__":
    asyncio.run(main())
