from fastapi.testclient import TestClient

from ally.config.mock_firestore import MockFirestore
from ally.main import create_app

client = TestClient(create_app(db=MockFirestore()))

print('ROOT:')
print(client.get('/').text)

print('\nHEALTH:')
print(client.get('/health').json())

print('\nDB HEALTH:')
resp = client.get('/health/db')
print(resp.status_code)
print(resp.json())
