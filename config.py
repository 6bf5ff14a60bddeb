"""
Configurazione centralizzata - modifica qui etichette, finestre e mapping.
"""

# Canale usato quando la prenotazione non ne indica uno (DIRECT | AIRBNB | BOOKING)
DEFAULT_SOURCE = "DIRECT"

# Nome del bucket per spese senza categoria o con categoria sconosciuta
UNCATEGORIZED = "Uncategorized"

# Stato pagamento considerato "da incassare / da pagare"
PENDING_STATUS = "Pending"

# Finestra di default del grafico ricavi: 3 mesi indietro, 2 avanti
SERIES_MONTHS_BACK = 3
SERIES_MONTHS_FORWARD = 2

# Quante prenotazioni mostrare nelle liste "prossime" / "recenti"
BOOKING_LIST_LIMIT = 5

# Etichette brevi dei mesi per i grafici (fisse, non dipendono dal locale)
MONTH_SHORT_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Fogli del file di backup
SHEET_BOOKINGS = "Bookings"
SHEET_EXPENSES = "Expenses"

# Mapping colonne backup → campo del modello
BOOKING_COLUMNS = {
    "Id":            "id",
    "GuestName":     "guest_name",
    "CheckInDate":   "start_date",
    "CheckOutDate":  "end_date",
    "TotalAmount":   "total_amount",
    "Prepayment":    "prepayment",
    "Source":        "source",
    "PaymentStatus": "payment_status",
    "Notes":         "notes",
}

EXPENSE_COLUMNS = {
    "Id":            "id",
    "Date":          "date",
    "Amount":        "amount",
    "Description":   "description",
    "Category":      "category_id",
    "PaymentStatus": "payment_status",
}

# Fogli del report mensile
SHEET_SUMMARY = "Riepilogo"
SHEET_BREAKDOWN = "Spese"
SHEET_SOURCES = "Canali"
