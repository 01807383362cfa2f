"""
DynamoDB Repository for drug data storage.
Handles CRUD operations for drug data in DynamoDB.

Items are keyed by drug code (PK=DRUG#<code>, SK=METADATA) so a conditional
put enforces code uniqueness. A global secondary index on ``id`` serves
single-record lookups.
"""
import logging
from datetime import datetime
from typing import List, Optional
import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError
from src.core import config
from src.core.exceptions import DuplicateDrugCodeException, StoreException
from src.models.drug_model import Drug
from src.repositories.db_repository import DBRepository

logger = logging.getLogger(__name__)

ID_INDEX_NAME = 'DrugIdIndex'
METADATA_SK = 'METADATA'


class DynamoRepository(DBRepository):
    """Repository for DynamoDB operations."""

    backend_name = "dynamodb"

    def __init__(self):
        resource_kwargs = {'region_name': config.settings.aws_region}
        if config.settings.dynamodb_endpoint_url:
            resource_kwargs['endpoint_url'] = config.settings.dynamodb_endpoint_url
        self.dynamodb = boto3.resource('dynamodb', **resource_kwargs)
        self.table = self.dynamodb.Table(config.settings.dynamodb_table_name)

    def create_table(self) -> None:
        """
        Create the drug table and its id index if it does not exist yet.

        Raises:
            StoreException: If table creation fails
        """
        try:
            self.table = self.dynamodb.create_table(
                TableName=config.settings.dynamodb_table_name,
                KeySchema=[
                    {'AttributeName': 'PK', 'KeyType': 'HASH'},
                    {'AttributeName': 'SK', 'KeyType': 'RANGE'}
                ],
                AttributeDefinitions=[
                    {'AttributeName': 'PK', 'AttributeType': 'S'},
                    {'AttributeName': 'SK', 'AttributeType': 'S'},
                    {'AttributeName': 'id', 'AttributeType': 'S'}
                ],
                GlobalSecondaryIndexes=[
                    {
                        'IndexName': ID_INDEX_NAME,
                        'KeySchema': [{'AttributeName': 'id', 'KeyType': 'HASH'}],
                        'Projection': {'ProjectionType': 'ALL'}
                    }
                ],
                BillingMode='PAY_PER_REQUEST'
            )
            self.table.wait_until_exists()
            logger.info("Created DynamoDB table %s", config.settings.dynamodb_table_name)
        except ClientError as e:
            if e.response['Error']['Code'] == 'ResourceInUseException':
                return
            raise StoreException(f"Failed to create drug table: {str(e)}") from e

    def scan(self, company: Optional[str] = None) -> List[Drug]:
        """
        Load all drug records, optionally restricted to one company.

        Raises:
            StoreException: If the scan fails
        """
        scan_kwargs = {}
        if company is not None:
            scan_kwargs['FilterExpression'] = Attr('company').eq(company)
        try:
            return [self._item_to_drug(item) for item in self._scan_items(**scan_kwargs)]
        except ClientError as e:
            raise StoreException(f"Failed to scan drug data: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error scanning drug data: {str(e)}") from e

    def count(self, company: Optional[str] = None) -> int:
        scan_kwargs = {'Select': 'COUNT'}
        if company is not None:
            scan_kwargs['FilterExpression'] = Attr('company').eq(company)
        try:
            total = 0
            while True:
                response = self.table.scan(**scan_kwargs)
                total += response.get('Count', 0)
                if 'LastEvaluatedKey' not in response:
                    return total
                scan_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']
        except ClientError as e:
            raise StoreException(f"Failed to count drug data: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error counting drug data: {str(e)}") from e

    def find_by_id(self, drug_id: str) -> Optional[Drug]:
        """
        Find a drug by its identifier using the id index.

        Raises:
            StoreException: If the query fails
        """
        try:
            response = self.table.query(
                IndexName=ID_INDEX_NAME,
                KeyConditionExpression=Key('id').eq(drug_id)
            )
            items = response.get('Items', [])
            return self._item_to_drug(items[0]) if items else None
        except ClientError as e:
            raise StoreException(f"Failed to query drug data: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error querying drug data: {str(e)}") from e

    def insert(self, drug: Drug) -> Drug:
        """
        Save a drug unless its code is already taken.

        Raises:
            DuplicateDrugCodeException: If the code already exists
            StoreException: If the save fails
        """
        try:
            self.table.put_item(
                Item=self._drug_to_item(drug),
                ConditionExpression='attribute_not_exists(PK)'
            )
            return drug
        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                raise DuplicateDrugCodeException() from e
            raise StoreException(f"Failed to save drug data: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error saving drug data: {str(e)}") from e

    def insert_many(self, drugs: List[Drug]) -> int:
        """
        Save drugs one by one with the uniqueness condition, skipping duplicates.

        Batch writes cannot carry conditions, so each item is a conditional put.

        Raises:
            StoreException: If a save fails for any reason other than a duplicate
        """
        inserted = 0
        for drug in drugs:
            try:
                self.insert(drug)
                inserted += 1
            except DuplicateDrugCodeException:
                logger.debug("Skipping duplicate drug code %s", drug.code)
        return inserted

    def delete_all(self) -> int:
        """
        Delete every drug record.

        Raises:
            StoreException: If the delete fails
        """
        try:
            keys = [
                {'PK': item['PK'], 'SK': item['SK']}
                for item in self._scan_items(ProjectionExpression='PK, SK')
            ]
            with self.table.batch_writer() as batch:
                for key in keys:
                    batch.delete_item(Key=key)
            return len(keys)
        except ClientError as e:
            raise StoreException(f"Failed to delete drug data: {str(e)}") from e
        except Exception as e:
            raise StoreException(f"Unexpected error deleting drug data: {str(e)}") from e

    def _scan_items(self, **scan_kwargs) -> List[dict]:
        """Run a scan across all result pages."""
        items = []
        while True:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get('Items', []))
            if 'LastEvaluatedKey' not in response:
                return items
            scan_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']

    def _create_pk(self, code: str) -> str:
        """Create partition key for drug."""
        return f"DRUG#{code}"

    def _drug_to_item(self, drug: Drug) -> dict:
        return {
            'PK': self._create_pk(drug.code),
            'SK': METADATA_SK,
            'id': drug.id,
            'code': drug.code,
            'generic_name': drug.generic_name,
            'brand_name': drug.brand_name,
            'company': drug.company,
            'launch_date': drug.launch_date.isoformat(),
            'created_at': drug.created_at.isoformat()
        }

    def _item_to_drug(self, item: dict) -> Drug:
        """Convert DynamoDB item to Drug domain model."""
        return Drug(
            code=item['code'],
            generic_name=item['generic_name'],
            brand_name=item['brand_name'],
            company=item['company'],
            launch_date=datetime.fromisoformat(item['launch_date']),
            id=item['id'],
            created_at=item.get('created_at')
        )
