#!/usr/bin/env python3
"""
Database setup script for Acko-MER AI.

This script performs:
1. Index creation for every document collection
2. Reference data seeding (conditions and symptoms) from a JSON file
3. Database health checks

The seed file holds two arrays, ``conditions`` and ``symptoms``, whose items
use the field names of the stored documents. Entries are upserted by ICD-10
code (conditions) or name (symptoms), so the script can be re-run safely.

Usage:
    python scripts/setup_database.py --full-setup --seed-file reference.json
    python scripts/setup_database.py --indexes-only
    python scripts/setup_database.py --seed-file reference.json
    python scripts/setup_database.py --health-check
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict

# Add the src directory to the Python path
sys.path.insert(0, "src")

import certifi
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from ackomer.adapters.db.mongo.models import DOCUMENT_MODELS
from ackomer.adapters.db.mongo.repositories.reference_repository import (
    MongoConditionRepository,
    MongoSymptomRepository,
)
from ackomer.core.config import get_settings
from ackomer.domain.entities.reference import AssessmentQuestion, Condition, RedFlag, Symptom
from ackomer.domain.enums.reference import (
    ConditionCategory,
    Severity,
    SymptomCategory,
    UrgencyLevel,
)


def condition_from_seed(item: Dict[str, Any]) -> Condition:
    """Build a condition from a seed entry; the ICD-10 code is upper-cased."""
    return Condition(
        name=item["name"],
        icd10_code=item["icd10_code"],
        category=ConditionCategory(item["category"]),
        description=item.get("description"),
        synonyms=item.get("synonyms", []),
        symptoms=item.get("symptoms", []),
        risk_factors=item.get("risk_factors", []),
        common_treatments=item.get("common_treatments", []),
        severity=Severity(item.get("severity", Severity.MODERATE.value)),
        prevalence=item.get("prevalence"),
        is_active=item.get("is_active", True),
    )


def symptom_from_seed(item: Dict[str, Any]) -> Symptom:
    """Build a symptom from a seed entry; body parts are lower-cased."""
    return Symptom(
        name=item["name"],
        category=SymptomCategory(item["category"]),
        description=item.get("description"),
        synonyms=item.get("synonyms", []),
        body_parts=item.get("body_parts", []),
        urgency_level=UrgencyLevel(item.get("urgency_level", UrgencyLevel.MEDIUM.value)),
        associated_conditions=item.get("associated_conditions", []),
        red_flags=[RedFlag(**r) for r in item.get("red_flags", [])],
        questions=[AssessmentQuestion(**q) for q in item.get("questions", [])],
        chronic=item.get("chronic", False),
        is_active=item.get("is_active", True),
    )


class DatabaseSetup:
    """Index creation, reference data seeding and health checks."""

    def __init__(self):
        self.settings = get_settings()
        uri = self.settings.database.uri
        if uri.startswith("mongodb+srv://"):
            self.client = AsyncIOMotorClient(uri, tls=True, tlsCAFile=certifi.where())
        else:
            self.client = AsyncIOMotorClient(uri)
        self.db = self.client[self.settings.database.db_name]

    async def create_indexes(self) -> bool:
        """Register the document models, which builds their declared indexes."""
        print("🔧 Creating indexes...")
        try:
            await init_beanie(database=self.db, document_models=DOCUMENT_MODELS)
        except Exception as e:
            print(f"❌ Index creation failed: {e}")
            return False
        print(f"✅ Indexes ready for {len(DOCUMENT_MODELS)} collections")
        return True

    async def seed_reference_data(self, seed_file: Path) -> bool:
        """Upsert conditions and symptoms from a JSON seed file."""
        print(f"🌱 Seeding reference data from {seed_file}...")
        try:
            payload = json.loads(seed_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            print(f"❌ Could not read seed file: {e}")
            return False

        await init_beanie(database=self.db, document_models=DOCUMENT_MODELS)

        try:
            conditions = [condition_from_seed(item) for item in payload.get("conditions", [])]
            symptoms = [symptom_from_seed(item) for item in payload.get("symptoms", [])]
        except (KeyError, TypeError, ValueError) as e:
            print(f"❌ Invalid seed entry: {e}")
            return False

        condition_repository = MongoConditionRepository()
        for condition in conditions:
            await condition_repository.save(condition)
        symptom_repository = MongoSymptomRepository()
        for symptom in symptoms:
            await symptom_repository.save(symptom)

        print(f"✅ Seeded {len(conditions)} conditions and {len(symptoms)} symptoms")
        return True

    async def health_check(self) -> Dict[str, Any]:
        """Report collection sizes and index names."""
        print("🏥 Performing database health check...")

        collections = await self.db.list_collection_names()
        report: Dict[str, Any] = {"collections": {}}
        for model in DOCUMENT_MODELS:
            name = model.Settings.name
            if name not in collections:
                report["collections"][name] = {"exists": False}
                continue
            indexes = await self.db[name].list_indexes().to_list(None)
            report["collections"][name] = {
                "exists": True,
                "documents": await self.db[name].count_documents({}),
                "indexes": [idx.get("name") for idx in indexes],
            }

        for name, info in report["collections"].items():
            if not info["exists"]:
                print(f"  ⚠️  {name}: missing")
            else:
                print(f"  {name}: {info['documents']} documents, {len(info['indexes'])} indexes")
        return report

    async def full_setup(self, seed_file: Path = None) -> bool:
        """Create indexes, optionally seed, then check health."""
        print("🚀 Starting database setup...")
        if not await self.create_indexes():
            return False
        if seed_file and not await self.seed_reference_data(seed_file):
            return False
        await self.health_check()
        print("🎉 Database setup complete")
        return True

    async def close(self):
        """Close the database connection."""
        self.client.close()


async def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Database setup and reference data seeding")
    parser.add_argument("--full-setup", action="store_true", help="Create indexes, seed and check health")
    parser.add_argument("--indexes-only", action="store_true", help="Create indexes only")
    parser.add_argument("--seed-file", type=Path, help="JSON file with conditions and symptoms")
    parser.add_argument("--health-check", action="store_true", help="Run health check only")

    args = parser.parse_args()

    if not any([args.full_setup, args.indexes_only, args.seed_file, args.health_check]):
        parser.print_help()
        return

    setup = DatabaseSetup()

    try:
        if args.full_setup:
            success = await setup.full_setup(args.seed_file)
            sys.exit(0 if success else 1)
        elif args.indexes_only:
            success = await setup.create_indexes()
            sys.exit(0 if success else 1)
        elif args.seed_file:
            success = await setup.seed_reference_data(args.seed_file)
            sys.exit(0 if success else 1)
        elif args.health_check:
            await setup.health_check()
    finally:
        await setup.close()


if __name__ == "__main__":
    asyncio.run(main())
