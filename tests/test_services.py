"""
Catalog service endpoints.
"""


class TestServices:

    def test_create_is_active(self, api):
        res = api.post("/services/", json={
            "name": "SEO audit", "category": "Marketing", "price": 450, "unit": "project",
        })
        assert res.status_code == 200
        assert res.json()["is_active"] is True
        assert res.json()["id"] == 3

    def test_invalid_category(self, api):
        res = api.post("/services/", json={"name": "X", "category": "Cooking", "price": 1})
        assert res.status_code == 422

    def test_status_filter(self, api):
        assert [s["id"] for s in api.get("/services/?status=active").json()] == [1]
        assert [s["id"] for s in api.get("/services/?status=inactive").json()] == [2]
        assert len(api.get("/services/?status=all").json()) == 2

    def test_category_filter_and_search(self, api):
        assert [s["id"] for s in api.get("/services/?category=Writing").json()] == [2]
        assert [s["id"] for s in api.get("/services/?search=brand").json()] == [1]
        assert api.get("/services/?search=brand&category=Writing").json() == []

    def test_active_services(self, api):
        assert [s["id"] for s in api.get("/services/active").json()] == [1]

    def test_by_category_only_active(self, api):
        assert [s["id"] for s in api.get("/services/category/Design").json()] == [1]
        assert api.get("/services/category/Writing").json() == []

    def test_toggle(self, api):
        assert api.post("/services/2/toggle").json()["is_active"] is True
        assert api.post("/services/2/toggle").json()["is_active"] is False

    def test_update_and_delete(self, api):
        assert api.put("/services/1", json={"price": 350}).json()["price"] == 350.0
        assert api.delete("/services/1").status_code == 200
        assert api.get("/services/1").status_code == 404

    def test_null_fields_are_ignored(self, api):
        res = api.put("/services/1", json={"name": None, "price": None, "is_active": None})

        assert res.status_code == 200
        assert res.json()["name"] == "Logo design"
        assert res.json()["price"] == 300.0
        assert res.json()["is_active"] is True
