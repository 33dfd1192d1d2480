from django.contrib import admin
from django.utils.html import format_html

from .models import Category, Order, Product, ProductImage, ProductLike, Review, TradeOffer


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ('image_url', 'is_primary', 'order', 'image_preview')
    readonly_fields = ('image_preview',)

    def image_preview(self, obj):
        if obj.image_url:
            return format_html('<img src="{}" width="100" height="100" />', obj.image_url)
        return "No Image"
    image_preview.short_description = "Preview"


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'product_count', 'created_at')
    search_fields = ('name', 'description')
    readonly_fields = ('created_at', 'product_count')

    def product_count(self, obj):
        return obj.products.filter(is_available=True).count()
    product_count.short_description = "Available Products"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'seller', 'category', 'price', 'stock', 'listing_type',
                    'is_available', 'created_at')
    list_filter = ('is_available', 'trade_only', 'condition', 'category', 'created_at')
    search_fields = ('name', 'description', 'brand_type', 'seller__email')
    readonly_fields = ('id', 'created_at', 'updated_at', 'view_count', 'like_count', 'listing_type')

    inlines = [ProductImageInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'description', 'seller', 'category')
        }),
        ('Listing', {
            'fields': ('price', 'trade_only', 'listing_type', 'stock', 'is_available')
        }),
        ('Details', {
            'fields': ('brand_type', 'condition', 'contact_info')
        }),
        ('Engagement', {
            'fields': ('view_count', 'like_count'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


@admin.register(ProductLike)
class ProductLikeAdmin(admin.ModelAdmin):
    list_display = ('product', 'user', 'created_at')
    search_fields = ('product__name', 'user__email')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'buyer', 'seller', 'product', 'quantity', 'total_amount', 'status', 'created_at')
    list_filter = ('status', 'payment_method', 'created_at')
    search_fields = ('buyer__email', 'seller__email', 'product__name')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(TradeOffer)
class TradeOfferAdmin(admin.ModelAdmin):
    list_display = ('id', 'product', 'offerer', 'item_name', 'offered_price', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('product__name', 'offerer__email', 'item_name')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'seller', 'reviewer', 'rating', 'order', 'created_at')
    list_filter = ('rating', 'created_at')
    search_fields = ('seller__email', 'reviewer__email', 'comment')
    readonly_fields = ('created_at', 'updated_at')
