"""
Unit tests for OrderService.
Tests workflow orchestration with mocked dependencies.
"""
import io
import os
from unittest.mock import Mock
import pytest
from src.services.order_service import OrderService
from src.services.tabular_reader import TabularReader
from src.services.validation_service import ValidationService
from src.models.uploaded_file import UploadedFile
from src.models.mapping_definition import MappingDefinition
from src.models.conversion_result import ConversionOutput, RowError
from src.models.dto.order_dto import GenerateRequest, MappingRequest, UploadResponse
from src.core.exceptions import NotFoundException, ValidationException


class TestOrderService:
    """Test suite for OrderService."""

    @pytest.fixture
    def mock_gateway(self):
        """Mock FileGatewayService."""
        return Mock()

    @pytest.fixture
    def mock_mapping_repo(self):
        """Mock MappingRepository."""
        return Mock()

    @pytest.fixture
    def mock_converter(self):
        """Mock ConversionService."""
        return Mock()

    @pytest.fixture
    def order_service(self, mock_gateway, mock_mapping_repo, mock_converter):
        """Create OrderService with mocked dependencies."""
        return OrderService(
            gateway=mock_gateway,
            mapping_repository=mock_mapping_repo,
            reader=TabularReader(preview_row_limit=20),
            validation_service=ValidationService(
                expected_fields={"quantity": ["qty"]}, match_mode="exact"
            ),
            conversion_service=mock_converter
        )

    def test_upload_order_file(self, order_service, mock_gateway):
        """Test upload stores the file and returns preview and validation."""
        mock_gateway.store.return_value = UploadedFile(
            file_id="1700000000000-abcd1234.csv",
            original_name="orders.csv",
            storage_key="uploads/1700000000000-abcd1234.csv",
            extension=".csv",
            size=16
        )

        result = order_service.upload_order_file(io.BytesIO(b"id,qty\n1,5\n2,7\n"), "orders.csv", "text/csv")

        assert isinstance(result, UploadResponse)
        assert result.file_id == "1700000000000-abcd1234.csv"
        assert result.headers == ["id", "qty"]
        assert result.preview_data == [{"id": "1", "qty": "5"}, {"id": "2", "qty": "7"}]
        assert result.total_rows == 2
        assert result.validation.is_valid
        assert "2 rows" in result.message
        mock_gateway.store.assert_called_once_with(b"id,qty\n1,5\n2,7\n", "orders.csv", "text/csv")

    def test_save_mapping(self, order_service, mock_mapping_repo):
        """Test a mapping request is persisted under its name."""
        mock_mapping_repo.save.return_value = "supplier-a"
        request = MappingRequest(
            mappingName="supplier-a",
            sourceFields=["qty"],
            targetFields=["Quantity"],
            mappingRules={"qty": "Quantity"}
        )

        result = order_service.save_mapping(request)

        assert result.mapping_id == "supplier-a"
        saved = mock_mapping_repo.save.call_args[0][0]
        assert saved.name == "supplier-a"
        assert saved.rules == {"qty": "Quantity"}

    def test_save_mapping_without_rules(self, order_service, mock_mapping_repo):
        """Test a mapping with nothing to map is rejected."""
        request = MappingRequest(mappingName="empty")

        with pytest.raises(ValidationException):
            order_service.save_mapping(request)
        mock_mapping_repo.save.assert_not_called()

    def test_get_mapping(self, order_service, mock_mapping_repo):
        mock_mapping_repo.load.return_value = MappingDefinition(name="m", rules={"a": "A"})

        result = order_service.get_mapping("m")

        assert result.name == "m"
        assert result.rules == {"a": "A"}

    def test_generate_order(self, order_service, mock_gateway, mock_mapping_repo, mock_converter, local_settings):
        """Test generation converts, stores and describes the output."""
        mock_gateway.retrieve.return_value = b"qty\n1\n"
        mapping = MappingDefinition(name="m", rules={"qty": "Quantity"})
        mock_mapping_repo.load.return_value = mapping
        mock_converter.convert.return_value = ConversionOutput(
            content=b"xlsx", processed_rows=1, total_rows=2,
            errors=[RowError(row=2, field="qty", message="Required field 'qty' is missing")]
        )

        result = order_service.generate_order(GenerateRequest(fileId="1-abcd1234.csv", mappingId="m"))

        assert result.generated_file.startswith("purchase_order_")
        assert result.generated_file.endswith(".xlsx")
        assert result.download_url == f"/api/orders/download/{result.generated_file}"
        assert result.processed_rows == 1
        assert result.total_rows == 2
        assert result.errors[0].row == 2
        args = mock_converter.convert.call_args[0]
        assert args[1] == ".csv"
        assert args[2] == local_settings.default_template_path
        assert args[3] is mapping
        mock_gateway.store_output.assert_called_once_with(b"xlsx", result.generated_file)

    def test_generate_order_missing_upload(self, order_service, mock_gateway, mock_converter):
        mock_gateway.retrieve.side_effect = NotFoundException("Uploaded file 'x.csv' not found")

        with pytest.raises(NotFoundException):
            order_service.generate_order(GenerateRequest(fileId="x.csv", mappingId="m"))
        mock_converter.convert.assert_not_called()

    def test_generate_order_missing_mapping(self, order_service, mock_gateway, mock_mapping_repo, mock_converter):
        mock_gateway.retrieve.return_value = b"qty\n1"
        mock_mapping_repo.load.side_effect = NotFoundException("Mapping 'm' not found")

        with pytest.raises(NotFoundException):
            order_service.generate_order(GenerateRequest(fileId="1-a.csv", mappingId="m"))
        mock_converter.convert.assert_not_called()

    def test_download_order(self, order_service, mock_gateway):
        mock_gateway.retrieve_output.return_value = b"xlsx"

        assert order_service.download_order("po.xlsx") == b"xlsx"

    @pytest.mark.parametrize("template_type", [None, "", "standard", "default"])
    def test_resolve_default_template(self, order_service, local_settings, template_type):
        assert order_service.resolve_template(template_type) == local_settings.default_template_path

    def test_resolve_named_template(self, order_service, local_settings):
        path = order_service.resolve_template("wholesale")

        assert path == os.path.join(local_settings.template_dir, "wholesale.xlsx")

    @pytest.mark.parametrize("template_type", ["../secrets", "wholesale\n"])
    def test_resolve_unsafe_template(self, order_service, local_settings, template_type):
        with pytest.raises(ValidationException):
            order_service.resolve_template(template_type)
