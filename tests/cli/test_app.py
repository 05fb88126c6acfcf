from unittest.mock import MagicMock, patch

from roadbill.errors import StorageError


class TestBuildServices:
    @patch("roadbill.cli.app.get_storage")
    @patch("roadbill.cli.app.get_bill_repository")
    def test_returns_services(self, mock_repo, mock_storage):
        from roadbill.cli.app import _build_services
        from roadbill.services.bill_service import BillService
        from roadbill.services.image_service import ImageService

        bill_svc, image_svc = _build_services()
        assert isinstance(bill_svc, BillService)
        assert isinstance(image_svc, ImageService)
        assert bill_svc.images is image_svc
        assert bill_svc.bill_repo is mock_repo.return_value


class TestMainMenu:
    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called_once()

    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    @patch("roadbill.cli.app.list_bills_menu")
    def test_list_bills(self, mock_list, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        bill_svc = MagicMock()
        mock_build.return_value = (bill_svc, MagicMock())
        mock_q.select.return_value.ask.side_effect = ["List Bills", "Exit"]

        main_menu()
        mock_list.assert_called_once_with(bill_svc)

    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    @patch("roadbill.cli.app.create_bill_menu")
    def test_create_bill(self, mock_create, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Create Bill", "Exit"]

        main_menu()
        mock_create.assert_called_once()

    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    @patch("roadbill.cli.app.export_bills_menu")
    def test_export(self, mock_export, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Export Bills", "Exit"]

        main_menu()
        mock_export.assert_called_once()

    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    @patch("roadbill.cli.app.image_menu")
    def test_images(self, mock_images, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        image_svc = MagicMock()
        mock_build.return_value = (MagicMock(), image_svc)
        mock_q.select.return_value.ask.side_effect = ["Signature & Stamp", "Exit"]

        main_menu()
        mock_images.assert_called_once_with(image_svc)

    @patch("roadbill.cli.app._build_services")
    @patch("roadbill.cli.app.questionary")
    @patch("roadbill.cli.app.list_bills_menu")
    def test_storage_error_returns_to_menu(self, mock_list, mock_q, mock_build):
        from roadbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_list.side_effect = StorageError("down")
        mock_q.select.return_value.ask.side_effect = ["List Bills", "Exit"]

        main_menu()
        assert mock_q.select.return_value.ask.call_count == 2


class TestEntryPoint:
    @patch("roadbill.__main__.main_menu")
    @patch("roadbill.__main__.configure_logging")
    def test_main_configures_logging_first(self, mock_logging, mock_menu):
        from roadbill.__main__ import main

        main()
        mock_logging.assert_called_once()
        mock_menu.assert_called_once()
