import csv
import io
from datetime import date


def create_farm(client, farm_payload, **overrides):
    resp = client.post("/api/farms", json={**farm_payload, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.headers["x-request-id"]


def test_farm_crud(client, farm_payload):
    farm = create_farm(client, farm_payload)

    assert client.get("/api/farms").json() == [farm]
    assert client.get(f"/api/farms/{farm['id']}").json()["name"] == "Green Valley"

    resp = client.put(f"/api/farms/{farm['id']}", json={"location": "Modesto, CA"})
    assert resp.status_code == 200
    assert resp.json()["location"] == "Modesto, CA"

    assert client.delete(f"/api/farms/{farm['id']}").json() == {"ok": True, "deleted": farm["id"]}
    assert client.get(f"/api/farms/{farm['id']}").status_code == 404


def test_validation_errors_are_422(client, farm_payload):
    assert client.post("/api/farms", json={**farm_payload, "size": 0}).status_code == 422
    assert client.post("/api/farms", json={**farm_payload, "name": "  "}).status_code == 422
    assert client.post("/api/expenses", json={"farm_id": "x", "category": "seeds", "amount": 5}).status_code == 422


def test_null_on_required_column_is_422(client, farm_payload):
    farm = create_farm(client, farm_payload)
    crop = client.post("/api/crops", json={"farm_id": farm["id"], "name": "Corn", "planting_date": "2024-04-01"}).json()
    task = client.post("/api/tasks", json={"farm_id": farm["id"], "type": "Watering"}).json()
    expense = client.post("/api/expenses", json={
        "farm_id": farm["id"], "category": "fuel", "amount": 10, "date": "2024-03-01",
    }).json()
    income = client.post("/api/income", json={"description": "Corn", "amount": 50, "date": "2024-03-02"}).json()

    for path, body in (
        (f"/api/farms/{farm['id']}", {"size": None}),
        (f"/api/crops/{crop['id']}", {"growth_stage": None}),
        (f"/api/tasks/{task['id']}", {"status": None}),
        (f"/api/expenses/{expense['id']}", {"amount": None}),
        (f"/api/income/{income['id']}", {"amount": None}),
    ):
        assert client.put(path, json=body).status_code == 422, path

    tasks = client.get("/api/tasks")
    assert tasks.status_code == 200
    assert tasks.json()[0]["status"] == "pending"
    assert client.get("/api/pages/tasks").status_code == 200
    assert client.get(f"/api/farms/{farm['id']}").json()["size"] == 50


def test_missing_records_are_404(client):
    assert client.put("/api/crops/nope", json={"name": "x"}).status_code == 404
    assert client.delete("/api/tasks/nope").status_code == 404


def test_camel_case_body_is_accepted(client, farm_payload):
    farm = create_farm(client, farm_payload)
    resp = client.post("/api/crops", json={
        "farmId": farm["id"],
        "name": "Corn",
        "plantingDate": "2024-04-01",
        "growthStage": "flowering",
    })
    assert resp.status_code == 201, resp.text
    assert resp.json()["farm_id"] == farm["id"]
    assert resp.json()["growth_stage"] == "flowering"


def test_list_filtered_by_farm(client, farm_payload):
    a = create_farm(client, farm_payload, name="A")
    b = create_farm(client, farm_payload, name="B")
    for farm in (a, b):
        client.post("/api/expenses", json={
            "farm_id": farm["id"], "category": "fuel", "amount": 10, "date": "2024-03-01",
        })
    listed = client.get("/api/expenses", params={"farm_id": b["id"]}).json()
    assert [e["farm_id"] for e in listed] == [b["id"]]


def test_task_toggle(client, farm_payload):
    farm = create_farm(client, farm_payload)
    task = client.post("/api/tasks", json={"farm_id": farm["id"], "type": "Watering"}).json()
    assert task["status"] == "pending"
    assert task["completed"] is False

    toggled = client.post(f"/api/tasks/{task['id']}/toggle").json()
    assert toggled["status"] == "completed"
    assert toggled["completed"] is True

    assert client.post("/api/tasks/nope/toggle").status_code == 404


def test_dashboard_page(client, farm_payload):
    farm = create_farm(client, farm_payload)
    client.post("/api/expenses", json={
        "farm_id": farm["id"], "category": "seeds", "amount": 40, "date": date.today().isoformat(),
    })
    vm = client.get("/api/pages/dashboard").json()
    assert vm["stats"]["total_farms"] == 1
    assert vm["stats"]["monthly_expenses"] == 40
    assert vm["recent_expenses"][0]["farm_name"] == "Green Valley"
    assert vm["weather"]["condition"] in {"sunny", "cloudy", "rainy", "stormy"}


def test_farm_details_page(client, farm_payload):
    farm = create_farm(client, farm_payload)
    vm = client.get(f"/api/pages/farms/{farm['id']}").json()
    assert vm["farm"]["id"] == farm["id"]
    assert vm["crops"] == []

    resp = client.get("/api/pages/farms/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"].startswith("Farm not found")


def test_expenses_page_filters(client, farm_payload):
    farm = create_farm(client, farm_payload)
    for category, amount in (("seeds", 100), ("fuel", 50)):
        client.post("/api/expenses", json={
            "farm_id": farm["id"], "category": category, "amount": amount, "date": "2024-03-01",
        })
    vm = client.get("/api/pages/expenses", params={"category": "seeds", "date_range": "all_time"}).json()
    assert vm["stats"]["total"] == 100
    assert client.get("/api/pages/expenses", params={"date_range": "fortnight"}).status_code == 422


def test_expenses_page_defaults_to_this_month(client, farm_payload):
    farm = create_farm(client, farm_payload)
    for day in (date.today().isoformat(), "2001-01-01"):
        client.post("/api/expenses", json={"farm_id": farm["id"], "category": "fuel", "amount": 10, "date": day})
    vm = client.get("/api/pages/expenses").json()
    assert vm["filters"]["date_range"] == "this_month"
    assert vm["stats"]["count"] == 1


def test_income_page(client):
    client.post("/api/income", json={"description": "Corn", "amount": 500, "date": "2024-05-01"})
    client.post("/api/expenses", json={"farm_id": "f", "category": "labor", "amount": 200, "date": "2024-05-02"})
    vm = client.get("/api/pages/income", params={"year": 2024}).json()
    assert vm["totals"]["net_profit"] == 300
    assert vm["totals"]["profit_margin"] == 60
    assert client.get("/api/pages/income", params={"month": 13}).status_code == 422


def test_weather_endpoints(client):
    assert client.get("/api/weather/current").status_code == 200
    assert len(client.get("/api/weather/forecast", params={"days": 3}).json()["forecast"]) == 3
    assert isinstance(client.get("/api/weather/alerts").json(), list)
    resp = client.get("/api/weather/historical", params={"start_date": "2024-05-07", "end_date": "2024-05-01"})
    assert resp.status_code == 400
    assert "advice" in client.get("/api/weather/advice").json()
    assert client.get("/api/pages/weather").json()["stats"]["todays_high"] is not None


def test_csv_export(client, farm_payload):
    farm = create_farm(client, farm_payload)
    client.post("/api/expenses", json={
        "farm_id": farm["id"], "category": "fuel", "amount": 12.5,
        "date": "2024-03-01", "description": "Diesel, 20 gal",
    })
    resp = client.get("/api/exports/expenses.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["Date", "Category", "Amount", "Farm", "Description"]
    assert rows[1] == ["2024-03-01", "Fuel", "$12.50", "Green Valley", "Diesel, 20 gal"]


def test_html_and_xlsx_exports(client, farm_payload):
    create_farm(client, farm_payload)
    html = client.get("/api/exports/crops.html", params={"auto_print": True})
    assert html.headers["content-type"].startswith("text/html")
    assert "window.print()" in html.text

    xlsx = client.get("/api/exports/income.xlsx")
    assert xlsx.status_code == 200
    assert xlsx.content[:2] == b"PK"


def test_unknown_export_is_422(client):
    assert client.get("/api/exports/farms.csv").status_code == 422
    assert client.get("/api/exports/crops.pdf").status_code == 422
