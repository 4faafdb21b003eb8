"""Tests for modules/admin/repository.py."""

from unittest.mock import MagicMock

from modules.admin.repository import AdminRepository


class TestAdminRepository:
    def test_list_active_plans(self):
        mock_db = MagicMock()
        chain = mock_db.table.return_value.select.return_value.eq
        chain.return_value.order.return_value.execute.return_value.data = [
            {"id": "p1", "name": "Mensal", "price": 19.9, "duration": "monthly"}
        ]

        plans = AdminRepository(mock_db).list_active_plans()

        mock_db.table.assert_called_with("subscription_plans")
        chain.assert_called_with("is_active", True)
        assert plans[0].is_active is True

    def test_deactivate_is_soft(self):
        mock_db = MagicMock()
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [{"id": "p1"}]

        assert AdminRepository(mock_db).deactivate_plan("p1") is True
        mock_db.table.return_value.update.assert_called_with({"is_active": False})
        mock_db.table.return_value.delete.assert_not_called()

    def test_count_articles(self):
        mock_db = MagicMock()
        select = mock_db.table.return_value.select
        select.return_value.not_.is_.return_value.execute.return_value.count = 42

        assert AdminRepository(mock_db).count_articles() == 42
        select.assert_called_with("id", count="exact")
        select.return_value.not_.is_.assert_called_with("article", "null")
