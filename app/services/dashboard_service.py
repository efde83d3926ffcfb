from sqlalchemy.orm import Session

from app.models.order import Order, Expense
from app.services.stock_service import stock_service


class DashboardService:

    def overview(self, db: Session) -> dict:
        orders = db.query(Order).all()
        expenses = db.query(Expense).all()

        total_income = sum(float(o.total_amount or 0) for o in orders if o.status == "Completed")
        total_expenses = sum(float(e.amount or 0) for e in expenses)
        return {
            "totalIncome":    total_income,
            "totalExpenses":  total_expenses,
            "profit":         total_income - total_expenses,
            "inventoryCount": stock_service.count_items(db),
            "pendingOrders":  sum(1 for o in orders if o.status == "Pending"),
            "systemLogs":     stock_service.recent_logs(db),
            "lowStock":       stock_service.low_stock_items(db),
        }


dashboard_service = DashboardService()
