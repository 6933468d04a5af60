import tkinter as tk
from tkinter import ttk, messagebox

from config import get_settings
from utils.logger import setup_logger
from utils.validators import (
    AMOUNT_RANGE,
    HISTORY_COUNT_RANGE,
    MEMBER_ID_RANGE,
    POINTS_RATE_RANGE,
    REDEEM_RANGE,
    in_range,
    is_valid_phone,
    validate_member_inputs,
)
from services.registry_service import MemberRegistry
from services.report_service import ReportService
from services.membership_service import tier_label


def parse_int(text: str, bounds: tuple) -> int | None:
    # "42" -> 42, None when not an integer or out of bounds
    try:
        value = int(text.strip())
    except ValueError:
        return None
    return value if in_range(value, *bounds) else None


def parse_amount(text: str, bounds: tuple) -> float | None:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if in_range(value, *bounds) else None


class LoyaltyApp:
    def __init__(self, root: tk.Tk):
        # core services / data
        self.root = root
        self.root.title("Loyalty Membership Ledger")
        self.root.geometry("900x600")

        self.settings = get_settings()
        self.logger = setup_logger(self.settings.log_dir)
        self.registry = MemberRegistry()
        self.report_service = ReportService(self.registry)

        # pick up the roster saved last session, if any
        if self.settings.data_path.exists():
            self.registry.restore()

        # notebook layout
        self.notebook = ttk.Notebook(self.root)
        self.notebook.pack(fill="both", expand=True)

        self.members_frame = ttk.Frame(self.notebook)
        self.points_frame = ttk.Frame(self.notebook)
        self.report_frame = ttk.Frame(self.notebook)
        self.settings_frame = ttk.Frame(self.notebook)

        self.notebook.add(self.members_frame, text="Members")
        self.notebook.add(self.points_frame, text="Points & Spending")
        self.notebook.add(self.report_frame, text="Reports")
        self.notebook.add(self.settings_frame, text="Settings & Data")

        self.build_members_tab()
        self.build_points_tab()
        self.build_report_tab()
        self.build_settings_tab()

        self.refresh_members_table()
        self.refresh_report()

    # Utility funcs

    def show_result(self, result, success_title: str = "Success") -> bool:
        if result.ok:
            messagebox.showinfo(success_title, result.message)
        else:
            messagebox.showerror("Error", result.message)
        return result.ok

    def read_member_id(self, entry: ttk.Entry) -> int | None:
        member_id = parse_int(entry.get(), MEMBER_ID_RANGE)
        if member_id is None:
            messagebox.showerror(
                "Error",
                f"Member ID must be an integer between {MEMBER_ID_RANGE[0]} and {MEMBER_ID_RANGE[1]}."
            )
        return member_id

    # TAB 1: MEMBERS

    def build_members_tab(self):
        outer = ttk.LabelFrame(self.members_frame, text="Members")
        outer.pack(fill="both", expand=True, padx=10, pady=10)

        columns = ("id", "name", "phone", "birthday", "tier", "lifetime", "annual", "points", "rate")
        self.members_tree = ttk.Treeview(
            outer,
            columns=columns,
            show="headings",
            height=10
        )
        headings = {
            "id": ("ID", 50),
            "name": ("Name", 130),
            "phone": ("Phone", 110),
            "birthday": ("Birthday", 90),
            "tier": ("Tier", 70),
            "lifetime": ("Lifetime Spend", 110),
            "annual": ("Annual Spend", 100),
            "points": ("Points", 70),
            "rate": ("Rate", 50),
        }
        for col, (text, width) in headings.items():
            self.members_tree.heading(col, text=text)
            anchor = "e" if col in ("lifetime", "annual", "points") else "w"
            self.members_tree.column(col, width=width, anchor=anchor)
        self.members_tree.pack(fill="both", expand=True, padx=5, pady=5)

        ttk.Button(
            outer,
            text="Refresh Members",
            command=self.refresh_members_table
        ).pack(pady=(0, 5))

        # add new member
        add_frame = ttk.LabelFrame(self.members_frame, text="Add New Member")
        add_frame.pack(fill="x", padx=10, pady=(0, 5))

        ttk.Label(add_frame, text="Name:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        ttk.Label(add_frame, text="Phone:").grid(row=0, column=2, sticky="e", padx=5, pady=5)
        ttk.Label(add_frame, text="Birthday (YYYY-MM-DD):").grid(row=0, column=4, sticky="e", padx=5, pady=5)

        self.add_name_entry = ttk.Entry(add_frame, width=16)
        self.add_phone_entry = ttk.Entry(add_frame, width=14)
        self.add_birthday_entry = ttk.Entry(add_frame, width=12)
        self.add_name_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        self.add_phone_entry.grid(row=0, column=3, sticky="w", padx=5, pady=5)
        self.add_birthday_entry.grid(row=0, column=5, sticky="w", padx=5, pady=5)

        ttk.Button(
            add_frame,
            text="Register Member",
            command=self.gui_add_member
        ).grid(row=0, column=6, sticky="w", padx=10, pady=5)

        # maintain existing member
        edit_frame = ttk.LabelFrame(self.members_frame, text="Find / Update / Delete")
        edit_frame.pack(fill="x", padx=10, pady=(0, 10))

        ttk.Label(edit_frame, text="Member ID:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        ttk.Label(edit_frame, text="Phone:").grid(row=0, column=2, sticky="e", padx=5, pady=5)

        self.edit_id_entry = ttk.Entry(edit_frame, width=10)
        self.edit_phone_entry = ttk.Entry(edit_frame, width=14)
        self.edit_id_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        self.edit_phone_entry.grid(row=0, column=3, sticky="w", padx=5, pady=5)

        ttk.Button(edit_frame, text="Find by Phone", command=self.gui_find_member).grid(
            row=0, column=4, padx=5, pady=5)
        ttk.Button(edit_frame, text="Update Phone", command=self.gui_update_phone).grid(
            row=0, column=5, padx=5, pady=5)
        ttk.Button(edit_frame, text="Delete Member", command=self.gui_delete_member).grid(
            row=0, column=6, padx=5, pady=5)

    def refresh_members_table(self):
        for row in self.members_tree.get_children():
            self.members_tree.delete(row)

        for m in self.registry.members:
            self.members_tree.insert(
                "",
                "end",
                values=(
                    m.id,
                    m.name,
                    m.phone,
                    m.birthday,
                    tier_label(m.tier),
                    f"{m.lifetime_spend:.2f}",
                    f"{m.annual_spend:.2f}",
                    m.points,
                    m.points_rate,
                )
            )
        self.logger.info("GUI: refreshed members table")

    def gui_add_member(self):
        name = self.add_name_entry.get().strip()
        phone = self.add_phone_entry.get().strip()
        birthday = self.add_birthday_entry.get().strip()

        errors = validate_member_inputs(name, phone, birthday)
        if errors:
            messagebox.showerror("Error", "\n".join(errors))
            return

        if self.registry.find_by_phone(phone).ok:
            messagebox.showerror("Error", f"Phone {phone} is already registered.")
            return

        result = self.registry.add(name, phone, birthday)

        self.add_name_entry.delete(0, tk.END)
        self.add_phone_entry.delete(0, tk.END)
        self.add_birthday_entry.delete(0, tk.END)

        self.refresh_members_table()
        self.refresh_report()
        self.show_result(result)

    def gui_find_member(self):
        phone = self.edit_phone_entry.get().strip()
        if not is_valid_phone(phone):
            messagebox.showerror("Error", "Please enter a valid phone number.")
            return

        result = self.registry.find_by_phone(phone)
        if not result.ok:
            messagebox.showerror("Not Found", result.message)
            return

        m = result.member
        # select the row in the table
        for row in self.members_tree.get_children():
            if str(self.members_tree.item(row, "values")[0]) == str(m.id):
                self.members_tree.selection_set(row)
                self.members_tree.see(row)
                break
        messagebox.showinfo(
            "Member",
            f"ID: {m.id}\nName: {m.name}\nTier: {tier_label(m.tier)} "
            f"(pays {m.discount_rate:.0%})\nPoints: {m.points}"
        )

    def gui_update_phone(self):
        member_id = self.read_member_id(self.edit_id_entry)
        if member_id is None:
            return
        phone = self.edit_phone_entry.get().strip()
        if not is_valid_phone(phone):
            messagebox.showerror("Error", "Please enter a valid phone number.")
            return

        result = self.registry.update_phone(member_id, phone)
        self.refresh_members_table()
        self.refresh_report()
        self.show_result(result)

    def gui_delete_member(self):
        member_id = self.read_member_id(self.edit_id_entry)
        if member_id is None:
            return
        if not messagebox.askyesno("Confirm", f"Delete member {member_id}?"):
            return

        result = self.registry.delete(member_id)
        self.refresh_members_table()
        self.refresh_report()
        self.show_result(result)

    # TAB 2: POINTS & SPENDING

    def build_points_tab(self):
        action_frame = ttk.LabelFrame(self.points_frame, text="Record Purchase / Redeem Points")
        action_frame.pack(fill="x", padx=10, pady=10)

        ttk.Label(action_frame, text="Member ID or Phone:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        ttk.Label(action_frame, text="Amount:").grid(row=0, column=2, sticky="e", padx=5, pady=5)
        ttk.Label(action_frame, text="Points:").grid(row=1, column=2, sticky="e", padx=5, pady=5)

        self.spend_key_entry = ttk.Entry(action_frame, width=16)
        self.spend_amount_entry = ttk.Entry(action_frame, width=12)
        self.redeem_points_entry = ttk.Entry(action_frame, width=12)
        self.spend_key_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        self.spend_amount_entry.grid(row=0, column=3, sticky="w", padx=5, pady=5)
        self.redeem_points_entry.grid(row=1, column=3, sticky="w", padx=5, pady=5)

        ttk.Button(action_frame, text="Record Purchase", command=self.gui_spend).grid(
            row=0, column=4, padx=10, pady=5)
        ttk.Button(action_frame, text="Redeem Points", command=self.gui_redeem).grid(
            row=1, column=4, padx=10, pady=5)

        # history table
        hist_frame = ttk.LabelFrame(self.points_frame, text="Purchase History")
        hist_frame.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        controls = ttk.Frame(hist_frame)
        controls.pack(fill="x", padx=5, pady=5)
        ttk.Label(controls, text="Member ID:").pack(side="left")
        self.hist_id_entry = ttk.Entry(controls, width=10)
        self.hist_id_entry.pack(side="left", padx=5)
        ttk.Label(controls, text="Most recent (blank = all):").pack(side="left")
        self.hist_n_entry = ttk.Entry(controls, width=6)
        self.hist_n_entry.pack(side="left", padx=5)
        ttk.Button(controls, text="Show", command=self.gui_show_history).pack(side="left", padx=5)

        columns = ("no", "list", "rate", "paid")
        self.history_tree = ttk.Treeview(hist_frame, columns=columns, show="headings", height=10)
        self.history_tree.heading("no", text="#")
        self.history_tree.heading("list", text="List Price")
        self.history_tree.heading("rate", text="Rate")
        self.history_tree.heading("paid", text="Paid")
        self.history_tree.column("no", width=50, anchor="center")
        self.history_tree.column("list", width=120, anchor="e")
        self.history_tree.column("rate", width=80, anchor="center")
        self.history_tree.column("paid", width=120, anchor="e")
        self.history_tree.pack(fill="both", expand=True, padx=5, pady=5)

        self.hist_summary_label = ttk.Label(hist_frame, text="")
        self.hist_summary_label.pack(anchor="w", padx=5, pady=(0, 5))

    def _resolve_member(self, key: str):
        if not key:
            messagebox.showerror("Error", "Please enter a member ID or phone number.")
            return None
        result = self.registry.lookup(key)
        if not result.ok:
            messagebox.showerror("Not Found", result.message)
            return None
        return result.member

    def gui_spend(self):
        member = self._resolve_member(self.spend_key_entry.get().strip())
        if member is None:
            return

        amount = parse_amount(self.spend_amount_entry.get(), AMOUNT_RANGE)
        if amount is None:
            messagebox.showerror(
                "Error",
                f"Amount must be a number between {AMOUNT_RANGE[0]} and {AMOUNT_RANGE[1]:.0f}."
            )
            return

        result = self.registry.spend(member.id, amount)
        if result.ok:
            receipt = result.data
            self.spend_amount_entry.delete(0, tk.END)
            messagebox.showinfo(
                "Purchase Recorded",
                f"List price: {receipt.list_price:.2f}\n"
                f"Tier: {tier_label(receipt.tier)} (rate {receipt.rate:.2f})\n"
                f"Paid: {receipt.paid:.2f}\n"
                f"Points earned: {receipt.earned_points}\n"
                f"Balance: {member.points}"
            )
        else:
            messagebox.showerror("Error", result.message)

        self.refresh_members_table()
        self.refresh_report()

    def gui_redeem(self):
        member = self._resolve_member(self.spend_key_entry.get().strip())
        if member is None:
            return

        points = parse_int(self.redeem_points_entry.get(), REDEEM_RANGE)
        if points is None:
            messagebox.showerror(
                "Error",
                f"Points must be an integer between {REDEEM_RANGE[0]} and {REDEEM_RANGE[1]}."
            )
            return

        if self.show_result(self.registry.redeem(member.id, points)):
            self.redeem_points_entry.delete(0, tk.END)
        self.refresh_members_table()
        self.refresh_report()

    def gui_show_history(self):
        member_id = self.read_member_id(self.hist_id_entry)
        if member_id is None:
            return

        n = None
        n_text = self.hist_n_entry.get().strip()
        if n_text:
            n = parse_int(n_text, HISTORY_COUNT_RANGE)
            if n is None:
                messagebox.showerror(
                    "Error",
                    f"Count must be between {HISTORY_COUNT_RANGE[0]} and {HISTORY_COUNT_RANGE[1]}."
                )
                return

        result = self.registry.history(member_id, n)
        if not result.ok:
            messagebox.showerror("Not Found", result.message)
            return

        for row in self.history_tree.get_children():
            self.history_tree.delete(row)
        for i, rec in enumerate(result.data, start=1):
            self.history_tree.insert(
                "",
                "end",
                values=(i, f"{rec.list_price:.2f}", f"{rec.rate:.2f}", f"{rec.paid:.2f}")
            )

        m = result.member
        if not result.data:
            self.hist_summary_label.config(text=f"{m.name}: no purchases yet.")
        else:
            self.hist_summary_label.config(
                text=f"{m.name} | Tier: {tier_label(m.tier)} | "
                     f"Lifetime: {m.lifetime_spend:.2f} | Annual: {m.annual_spend:.2f} | "
                     f"Points: {m.points}"
            )
        self.logger.info(f"GUI: showed {len(result.data)} history record(s) for member {member_id}")

    # TAB 3: REPORTS

    def build_report_tab(self):
        summary_frame = ttk.LabelFrame(self.report_frame, text="Roster Summary")
        summary_frame.pack(fill="x", padx=10, pady=10)

        self.summary_text = tk.Text(summary_frame, height=12, width=80)
        self.summary_text.pack(fill="x", padx=5, pady=5)

        ttk.Button(summary_frame, text="Refresh Summary", command=self.refresh_report).pack(pady=(0, 5))

        forecast_frame = ttk.LabelFrame(self.report_frame, text="Year-End Tier Forecast")
        forecast_frame.pack(fill="x", padx=10, pady=(0, 10))

        ttk.Label(forecast_frame, text="Member ID or Phone:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        self.forecast_key_entry = ttk.Entry(forecast_frame, width=16)
        self.forecast_key_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        ttk.Button(forecast_frame, text="Forecast", command=self.gui_forecast).grid(
            row=0, column=2, padx=10, pady=5)

        self.forecast_label = ttk.Label(forecast_frame, text="", justify="left")
        self.forecast_label.grid(row=1, column=0, columnspan=3, sticky="w", padx=5, pady=5)

    def refresh_report(self):
        summary = self.report_service.roster_summary()

        lines = [
            f"Members: {summary['members']}",
            f"Lifetime spend: {summary['lifetime_spend']:.2f}",
            f"Annual spend: {summary['annual_spend']:.2f}",
            f"Points outstanding: {summary['points_outstanding']}",
            "",
            "Members per tier:",
        ]
        for label, count in summary["tier_counts"].items():
            lines.append(f"  {label}: {count}")
        lines.append("")
        lines.append("Top spenders:")
        if not summary["top_spenders"]:
            lines.append("  (none)")
        for member_id, name, spend in summary["top_spenders"]:
            lines.append(f"  #{member_id} {name}: {spend:.2f}")

        self.summary_text.delete("1.0", tk.END)
        self.summary_text.insert(tk.END, "\n".join(lines))

        self.logger.info(
            f"GUI: report refreshed. members={summary['members']}, "
            f"points_outstanding={summary['points_outstanding']}"
        )

    def gui_forecast(self):
        member = self._resolve_member(self.forecast_key_entry.get().strip())
        if member is None:
            return

        f = self.report_service.forecast_tier(member)
        lines = [
            f"Annual spend so far: {f.annual_spend:.2f} ({tier_label(f.current_tier)})",
            f"Monthly average: {f.monthly_average:.2f}, months remaining: {f.remaining_months}",
            f"Projected year-end spend: {f.projected_spend:.2f} -> {tier_label(f.projected_tier)}",
        ]
        if f.next_tier is not None:
            lines.append(f"Needed for {tier_label(f.next_tier)}: {f.amount_to_next_tier:.2f}")
        else:
            lines.append("Already at the top tier.")
        self.forecast_label.config(text="\n".join(lines))

    # TAB 4: SETTINGS & DATA

    def build_settings_tab(self):
        rate_frame = ttk.LabelFrame(self.settings_frame, text="Points Rate (points per unit paid)")
        rate_frame.pack(fill="x", padx=10, pady=10)

        ttk.Label(rate_frame, text="New rate:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        self.rate_entry = ttk.Entry(rate_frame, width=8)
        self.rate_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        self.rate_entry.insert(0, str(self.registry.default_points_rate))

        ttk.Button(rate_frame, text="New Members Only", command=self.gui_set_default_rate).grid(
            row=0, column=2, padx=5, pady=5)
        ttk.Button(rate_frame, text="Apply to All Members", command=self.gui_set_rate_all).grid(
            row=0, column=3, padx=5, pady=5)

        data_frame = ttk.LabelFrame(self.settings_frame, text="Data File")
        data_frame.pack(fill="x", padx=10, pady=(0, 10))

        ttk.Label(data_frame, text="File name:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        self.file_entry = ttk.Entry(data_frame, width=30)
        self.file_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        self.file_entry.insert(0, self.settings.data_file)

        ttk.Button(data_frame, text="Save", command=self.gui_save).grid(row=0, column=2, padx=5, pady=5)
        ttk.Button(data_frame, text="Load", command=self.gui_load).grid(row=0, column=3, padx=5, pady=5)

    def _read_rate(self) -> int | None:
        rate = parse_int(self.rate_entry.get(), POINTS_RATE_RANGE)
        if rate is None:
            messagebox.showerror(
                "Error",
                f"Rate must be an integer between {POINTS_RATE_RANGE[0]} and {POINTS_RATE_RANGE[1]}."
            )
        return rate

    def gui_set_default_rate(self):
        rate = self._read_rate()
        if rate is None:
            return
        self.show_result(self.registry.set_default_points_rate(rate))

    def gui_set_rate_all(self):
        rate = self._read_rate()
        if rate is None:
            return
        self.show_result(self.registry.set_points_rate(rate))
        self.refresh_members_table()
        self.refresh_report()

    def gui_save(self):
        filename = self.file_entry.get().strip() or self.settings.data_file
        self.show_result(self.registry.persist(filename), success_title="Saved")

    def gui_load(self):
        filename = self.file_entry.get().strip() or self.settings.data_file
        if len(self.registry) and not messagebox.askyesno(
            "Confirm", "Loading replaces every member currently in memory. Continue?"
        ):
            return
        self.show_result(self.registry.restore(filename), success_title="Loaded")
        self.refresh_members_table()
        self.refresh_report()

    def on_close(self):
        if messagebox.askyesno("Exit", "Save members before exiting?"):
            self.registry.persist()
        self.logger.info("GUI: closed")
        self.root.destroy()


def main():
    root = tk.Tk()
    app = LoyaltyApp(root)
    root.protocol("WM_DELETE_WINDOW", app.on_close)
    root.mainloop()


if __name__ == "__main__":
    main()
