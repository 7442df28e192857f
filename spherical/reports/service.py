"""
Reports Service — sales and catalog aggregates for the back office.

    - Sales summary: count, revenue, average sale value, revenue by category
    - Dashboard: counts across products, inventory, users and enquiries

All sales figures come from MongoDB aggregation pipelines over `sales`.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.inventory import is_low_stock


class ReportsService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.sales = db["sales"]
        self.products = db["products"]
        self.inventory = db["inventory"]
        self.users = db["users"]
        self.quotes = db["quote_requests"]
        self.contacts = db["contact_requests"]

    async def sales_summary(self) -> dict:
        totals_pipeline = [
            {"$group": {
                "_id": None,
                "count": {"$sum": 1},
                "revenue": {"$sum": "$final_amount"},
            }},
        ]
        totals = await self.sales.aggregate(totals_pipeline).to_list(1)
        total_sales = totals[0]["count"] if totals else 0
        total_revenue = totals[0]["revenue"] if totals else 0

        by_category_pipeline = [
            {"$unwind": "$items"},
            {"$group": {
                "_id": "$items.category",
                "sale_ids": {"$addToSet": "$_id"},
                "amount": {"$sum": {"$multiply": ["$items.quantity", "$items.unit_price"]}},
            }},
            {"$project": {
                "_id": 0,
                "category": "$_id",
                "count": {"$size": "$sale_ids"},
                "amount": 1,
            }},
            {"$sort": {"amount": -1}},
        ]
        by_category = await self.sales.aggregate(by_category_pipeline).to_list(None)

        return {
            "total_sales": total_sales,
            "total_revenue": round(total_revenue, 2),
            "average_sale_value": round(total_revenue / total_sales, 2) if total_sales else 0,
            "sales_by_category": by_category,
        }

    async def dashboard(self) -> dict:
        # naive bounds; the driver reads them as UTC
        today_start = datetime.now(timezone.utc).replace(
            tzinfo=None, hour=0, minute=0, second=0, microsecond=0
        )

        today_pipeline = [
            {"$match": {"created_at": {"$gte": today_start}}},
            {"$group": {"_id": None, "count": {"$sum": 1}, "revenue": {"$sum": "$final_amount"}}},
        ]
        today_result = await self.sales.aggregate(today_pipeline).to_list(1)
        today = today_result[0] if today_result else {"count": 0, "revenue": 0}
        today.pop("_id", None)

        low_stock = len([doc async for doc in self.inventory.find({}) if is_low_stock(doc)])

        return {
            "today": today,
            "total_products": await self.products.count_documents({"is_deleted": {"$ne": True}}),
            "low_stock_items": low_stock,
            "active_users": await self.users.count_documents(
                {"is_active": True, "is_deleted": {"$ne": True}}
            ),
            "open_quote_requests": await self.quotes.count_documents({"status": "new"}),
            "open_contact_requests": await self.contacts.count_documents({"status": "new"}),
        }
