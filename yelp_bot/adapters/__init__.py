"""
Bot Adapters Module
===================

Translation layers between a chat platform and the conversation flow:
1. Receive events from the platform webhook
2. Normalize them into platform-neutral events
3. Hand them to the ConversationFlowController
4. Format and post the bot's replies back to the platform

Available Adapters:
- watson_work: IBM Watson Work Services (see adapters/watson_work/)
"""
