"""
Load demo data for the canteen app.

Creates:
- Ingredient master data
- A lunch menu for canteen-1 with 15 dishes
- Two suppliers

Usage:
    python manage.py load_canteen_demo
    python manage.py load_canteen_demo --date 2025-01-02 --submit
    python manage.py load_canteen_demo --clear
"""

from django.core.management.base import BaseCommand, CommandError

INGREDIENTS = [
    ("西红柿", "个"),
    ("鸡蛋", "个"),
    ("鸡肉", "g"),
    ("花生", "g"),
    ("辣椒", "个"),
    ("土豆", "个"),
    ("牛腩", "g"),
    ("青菜", "g"),
    ("五花肉", "g"),
    ("豆腐", "块"),
    ("茄子", "个"),
    ("豆角", "g"),
    ("排骨", "g"),
    ("鸭肉", "g"),
    ("酸菜", "g"),
    ("鱼", "条"),
    ("青椒", "个"),
    ("胡萝卜", "根"),
    ("木耳", "g"),
    ("西兰花", "朵"),
    ("米饭", "碗"),
    ("火腿", "g"),
    ("虾仁", "g"),
]

# (dish, chef, [(ingredient, quantity, unit), ...])
DISHES = [
    ("西红柿炒蛋", "王师傅", [("西红柿", 2, "个"), ("鸡蛋", 3, "个")]),
    ("宫保鸡丁", "李师傅", [("鸡肉", 300, "g"), ("花生", 50, "g"), ("辣椒", 5, "个")]),
    ("土豆牛腩", "张师傅", [("土豆", 2, "个"), ("牛腩", 500, "g")]),
    ("清炒时蔬", "王师傅", [("青菜", 400, "g")]),
    ("红烧肉", "李师傅", [("五花肉", 500, "g")]),
    ("麻婆豆腐", "陈师傅", [("豆腐", 2, "块"), ("辣椒", 3, "个")]),
    ("红烧茄子", "王师傅", [("茄子", 2, "个")]),
    ("干煸豆角", "李师傅", [("豆角", 300, "g"), ("辣椒", 4, "个")]),
    ("糖醋排骨", "张师傅", [("排骨", 500, "g")]),
    ("啤酒鸭", "赵师傅", [("鸭肉", 600, "g")]),
    ("酸菜鱼", "刘师傅", [("酸菜", 200, "g"), ("鱼", 1, "条")]),
    ("地三鲜", "王师傅", [("土豆", 1, "个"), ("茄子", 1, "个"), ("青椒", 2, "个")]),
    ("鱼香肉丝", "李师傅", [("五花肉", 200, "g"), ("木耳", 50, "g"), ("胡萝卜", 1, "根")]),
    ("蒜蓉西兰花", "张师傅", [("西兰花", 1, "朵")]),
    (
        "扬州炒饭",
        "陈师傅",
        [("米饭", 2, "碗"), ("鸡蛋", 2, "个"), ("火腿", 50, "g"), ("虾仁", 50, "g")],
    ),
]

SUPPLIERS = [
    ("绿源蔬菜批发", "周经理", "13800000001"),
    ("鲜达肉禽", "吴经理", "13800000002"),
]

DEFAULT_SERVINGS = 50


class Command(BaseCommand):
    help = "加载食堂演示数据"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            default="2025-01-01",
            help="菜单日期 (YYYY-MM-DD)",
        )
        parser.add_argument(
            "--canteen",
            default="canteen-1",
            help="食堂ID",
        )
        parser.add_argument(
            "--submit",
            action="store_true",
            help="保存后直接提交菜单",
        )
        parser.add_argument(
            "--clear",
            action="store_true",
            help="加载前清除现有数据",
        )

    def handle(self, *args, **options):
        from canteen.exceptions import CanteenError
        from canteen.models import Ingredient, Supplier
        from canteen.services import save_menu

        self.stdout.write("=" * 60)
        self.stdout.write("🍚 加载食堂演示数据...")
        self.stdout.write("=" * 60)

        if options["clear"]:
            self._clear()

        for name, unit in INGREDIENTS:
            Ingredient.objects.get_or_create(name=name, defaults={"unit": unit})
        self.stdout.write(f"   ✓ {len(INGREDIENTS)} 种原料")

        for name, contact, phone in SUPPLIERS:
            Supplier.objects.get_or_create(
                name=name, defaults={"contact": contact, "phone": phone}
            )
        self.stdout.write(f"   ✓ {len(SUPPLIERS)} 家供应商")

        payload = {
            "date": options["date"],
            "canteen": options["canteen"],
            "meal": "lunch",
            "status": "submitted" if options["submit"] else "draft",
            "dishes": [
                {
                    "name": dish,
                    "chef_name": chef,
                    "planned_servings": DEFAULT_SERVINGS,
                    "ingredients": [
                        {"name": name, "quantity": quantity, "unit": unit}
                        for name, quantity, unit in lines
                    ],
                }
                for dish, chef, lines in DISHES
            ],
        }

        try:
            menu = save_menu(payload)
        except CanteenError as exc:
            if exc.code == "MENU_LOCKED":
                self.stdout.write(
                    self.style.WARNING(f"⚠️  {options['date']} 的菜单已提交，跳过")
                )
                return
            raise CommandError(exc.message) from exc

        self.stdout.write(f"   ✓ 菜单 {menu} ({menu.get_status_display()})")
        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS(f"✅ 已写入 {menu.dishes.count()} 道菜品"))
        self.stdout.write("=" * 60)

    def _clear(self):
        from canteen.models import Ingredient, Menu, PurchaseOrder, Supplier

        self.stdout.write("\n🗑️  清除现有数据...")
        PurchaseOrder.objects.all().delete()
        Menu.objects.all().delete()
        Ingredient.objects.all().delete()
        Supplier.objects.all().delete()
        self.stdout.write(self.style.SUCCESS("   ✓ 数据已清除"))
