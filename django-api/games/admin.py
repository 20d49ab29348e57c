from django.contrib import admin

from games.models import DiscountCode, Game, GameAttendee, Group, Player


class GameAttendeeInline(admin.TabularInline):
    model = GameAttendee
    extra = 0
    fields = ["player", "payment_status", "amount_paid", "payment_intent_id"]


class GameInline(admin.TabularInline):
    model = Game
    extra = 0
    fields = ["name", "game_date", "game_time", "total_tickets", "available_tickets"]


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "created_at"]
    search_fields = ["name", "email"]


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ["name", "created_by", "created_at"]
    search_fields = ["name"]
    inlines = [GameInline]


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "group",
        "game_date",
        "game_time",
        "total_tickets",
        "available_tickets",
    ]
    list_filter = ["group", "game_date"]
    search_fields = ["name", "location"]
    inlines = [GameAttendeeInline]


@admin.register(GameAttendee)
class GameAttendeeAdmin(admin.ModelAdmin):
    list_display = ["player", "game", "payment_status", "amount_paid"]
    list_filter = ["payment_status", "game__group"]


@admin.register(DiscountCode)
class DiscountCodeAdmin(admin.ModelAdmin):
    list_display = [
        "code",
        "discount_type",
        "discount_value",
        "game",
        "valid_until",
        "used_count",
        "max_uses",
        "is_active",
    ]
    list_filter = ["is_active", "discount_type"]
    search_fields = ["code", "description"]
