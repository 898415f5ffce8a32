import cli


class FakeClient:
    calls = []

    def __init__(self, base_url, api_key=None):
        self.base_url = base_url
        self.api_key = api_key

    def get_stats(self):
        FakeClient.calls.append(("stats",))
        return {"success": True, "data": {
            "totalProducts": 3, "inStock": 2, "outOfStock": 1,
            "categoryBreakdown": {"electronics": 2, "kitchen": 1},
            "averagePrice": 683.33, "priceRange": {"min": 50, "max": 1200},
        }}

    def list_products(self, category, search, in_stock, page, limit):
        FakeClient.calls.append(("list", category, search, in_stock, page, limit))
        return {"success": True, "data": [
            {"id": "1", "name": "Laptop", "price": 1200, "category": "electronics", "inStock": True},
        ], "pagination": {"currentPage": page, "totalPages": 1, "totalProducts": 1}}

    def delete_product(self, product_id):
        FakeClient.calls.append(("delete", product_id))
        return {"success": False, "message": "Product not found"}


def test_parser_write_commands():
    args = cli.build_parser().parse_args(
        ["--api-key", "k", "update", "7", "--name", "Lamp", "--price", "19.5", "--category", "home"]
    )
    assert args.command == "update"
    assert args.product_id == "7"
    assert args.price == 19.5
    assert args.in_stock is None


def test_list_and_stats_render(monkeypatch, capsys):
    monkeypatch.setattr(cli, "ProductClient", FakeClient)
    FakeClient.calls = []
    assert cli.main(["list", "--category", "electronics", "--in-stock", "true", "--limit", "5"]) == 0
    assert cli.main(["stats"]) == 0
    assert FakeClient.calls == [("list", "electronics", None, True, 1, 5), ("stats",)]
    out = capsys.readouterr().out
    assert "Laptop" in out
    assert "683.33" in out


def test_failed_envelope_exits_nonzero(monkeypatch, capsys):
    monkeypatch.setattr(cli, "ProductClient", FakeClient)
    assert cli.main(["--api-key", "k", "delete", "nope"]) == 1
    assert "Product not found" in capsys.readouterr().out
